"""
Domain exceptions for programs services.

Exception Hierarchy:
    ProgramsServiceError (base)
    └── ScheduleError

Usage:
    from apps.programs.services.exceptions import ScheduleError

    try:
        end = compute_end_date(start, days, count)
    except ScheduleError as e:
        return Response({'error': str(e)}, status=400)
"""


class ProgramsServiceError(Exception):
    """Base exception for programs services."""
    pass


class ScheduleError(ProgramsServiceError):
    """
    Raised when a product's recurrence rule cannot be evaluated.

    Covers unparseable dates, unknown weekday labels and a meeting count
    below one. The calculator never substitutes a default for bad input;
    callers decide what to show instead.

    Example:
        raise ScheduleError("meetings_count must be at least 1, got 0")
    """
    pass
