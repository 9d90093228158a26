"""Services for programs business logic (seasons, pools, products)."""

from .exceptions import (
    ProgramsServiceError,
    ScheduleError,
)
from .schedule import (
    parse_date,
    parse_weekdays,
    normalize_weekdays,
    weekday_number,
    compute_end_date,
    count_meetings_between,
    compute_progress,
    meets_on,
    format_progress,
)

__all__ = [
    # Exceptions
    'ProgramsServiceError',
    'ScheduleError',
    # Meeting Schedule Calculator
    'parse_date',
    'parse_weekdays',
    'normalize_weekdays',
    'weekday_number',
    'compute_end_date',
    'count_meetings_between',
    'compute_progress',
    'meets_on',
    'format_progress',
]
