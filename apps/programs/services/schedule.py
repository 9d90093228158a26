"""
Meeting Schedule Calculator
============================

Turns a product's recurrence rule (start date + selected weekdays + number
of meetings) into a concrete end date, and reports meeting progress as of
any reference date.

Weekdays are numbered Sunday=0 … Saturday=6. Saturday is the pool's rest
day: it is accepted as a label but never counts as a meeting day.

Functions:
    parse_date: Coerce a date or ISO string into a ``date``.
    parse_weekdays: Map weekday labels to a set of weekday numbers.
    compute_end_date: Date of the last meeting.
    count_meetings_between: Meeting days in an inclusive date range.
    compute_progress: ``{'current', 'total'}`` for a product on a date.
    meets_on: Whether a product holds a meeting on a given day.
    format_progress: Render progress through the configured template.

Example:
    Four meetings on Sundays and Tuesdays::

        >>> compute_end_date(date(2024, 1, 7), ['sunday', 'tuesday'], 4)
        datetime.date(2024, 1, 16)

        >>> compute_progress(product, date(2024, 1, 10))
        {'current': 2, 'total': 4}

Note:
    Every function here is pure. Invalid input raises ``ScheduleError``;
    nothing is silently replaced by a default.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date as django_parse_date

from apps.programs.models import Weekday
from .exceptions import ScheduleError


SATURDAY = 6

# Sunday-first ordering, matching Weekday declaration order
WEEKDAY_NUMBERS = {}
for _number, (_value, _label) in enumerate(Weekday.choices):
    WEEKDAY_NUMBERS[_value] = _number
    WEEKDAY_NUMBERS[str(_label)] = _number
    WEEKDAY_NUMBERS[_value[:3]] = _number


def parse_date(value, field='date') -> date:
    """
    Coerce ``value`` into a ``date``.

    Accepts ``date`` / ``datetime`` instances and ISO ``YYYY-MM-DD`` strings.

    Raises:
        ScheduleError: If the value is missing or cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            parsed = django_parse_date(value.strip())
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    raise ScheduleError(f"Invalid {field}: {value!r}")


def _meetings_total(value) -> int:
    try:
        total = int(value)
    except (TypeError, ValueError):
        raise ScheduleError(f"meetings_count must be a whole number, got {value!r}")
    if total < 1:
        raise ScheduleError(f"meetings_count must be at least 1, got {value!r}")
    return total


def weekday_number(day: date) -> int:
    """Sunday-based weekday number (Sunday=0 … Saturday=6)."""
    return (day.weekday() + 1) % 7


def _weekday_for_label(label) -> int:
    key = str(label).strip()
    number = WEEKDAY_NUMBERS.get(key, WEEKDAY_NUMBERS.get(key.lower()))
    if number is None:
        raise ScheduleError(f"Unknown weekday label: {label!r}")
    return number


def parse_weekdays(labels: Optional[Iterable]) -> frozenset:
    """
    Map weekday labels to the set of schedulable weekday numbers.

    Labels may be stored values (``'sunday'``), Hebrew display labels
    (``'ראשון'``) or three-letter English abbreviations (``'Sun'``),
    case-insensitively. Saturday is dropped.

    Raises:
        ScheduleError: On an unknown label.
    """
    return frozenset(
        number for number in map(_weekday_for_label, labels or ())
        if number != SATURDAY
    )


def normalize_weekdays(labels: Optional[Iterable]) -> list:
    """
    Convert any accepted weekday labels to stored ``Weekday`` values.

    Duplicates are removed and the result is Sunday-first. Saturday is
    kept here so a stored rule round-trips; it is only ignored when
    meetings are counted.
    """
    numbers = set(map(_weekday_for_label, labels or ()))
    return [Weekday.values[number] for number in sorted(numbers)]


def compute_end_date(start_date, days_of_week, meetings_count) -> date:
    """
    Compute the date of a product's last meeting.

    Walks forward from ``start_date`` one calendar day at a time; each day
    whose weekday is selected uses up one meeting. The day the last meeting
    is used up is the end date. ``start_date`` counts as meeting #1 when it
    falls on a selected weekday.

    Args:
        start_date (date | str): First possible meeting day.
        days_of_week (Iterable[str]): Selected weekday labels.
        meetings_count (int): Total planned meetings, at least 1.

    Returns:
        date: The end date, or ``start_date`` when no schedulable weekday
        is selected.

    Raises:
        ScheduleError: On an invalid date, weekday label or meeting count.

    Example:
        >>> compute_end_date('2024-01-07', ['sunday', 'tuesday'], 4)
        datetime.date(2024, 1, 16)
    """
    start = parse_date(start_date, 'start_date')
    remaining = _meetings_total(meetings_count)

    weekdays = parse_weekdays(days_of_week)
    if not weekdays:
        return start

    current = start
    while True:
        if weekday_number(current) in weekdays:
            remaining -= 1
            if remaining == 0:
                return current
        current += timedelta(days=1)


def count_meetings_between(start, end, weekdays: frozenset) -> int:
    """Number of days in ``[start, end]`` whose weekday is in ``weekdays``."""
    if end < start or not weekdays:
        return 0

    span = (end - start).days + 1
    full_weeks, leftover = divmod(span, 7)
    count = full_weeks * len(weekdays)
    for offset in range(leftover):
        if weekday_number(start + timedelta(days=offset)) in weekdays:
            count += 1
    return count


def compute_progress(product, reference_date=None, *, default_total=None) -> dict:
    """
    Report which meeting a product is at on ``reference_date``.

    Args:
        product: Any object with ``start_date``, ``days_of_week`` and
            ``meetings_count`` attributes (normally a ``Product``).
        reference_date (date | str, optional): Day to evaluate. Defaults to
            today in the project time zone.
        default_total (int, optional): Total used when the product has no
            ``meetings_count``. Defaults to ``settings.DEFAULT_MEETINGS_COUNT``.

    Returns:
        dict: ``{'current': int, 'total': int}`` with
        ``0 <= current <= total``. A product with no schedulable weekday
        reports ``current == 0``.

    Raises:
        ScheduleError: On an invalid date, weekday label or meeting count.
    """
    start = parse_date(product.start_date, 'start_date')
    if reference_date is None:
        reference = timezone.localdate()
    else:
        reference = parse_date(reference_date, 'reference_date')

    if product.meetings_count is None:
        total = default_total if default_total is not None else settings.DEFAULT_MEETINGS_COUNT
    else:
        total = product.meetings_count
    total = _meetings_total(total)

    weekdays = parse_weekdays(product.days_of_week)
    if reference < start:
        return {'current': 0, 'total': total}

    current = count_meetings_between(start, reference, weekdays)
    return {'current': min(current, total), 'total': total}


def meets_on(product, day) -> bool:
    """
    True when ``product`` holds a meeting on ``day``.

    The day must fall on a selected weekday inside the product's
    ``[start_date, end_date]`` window.
    """
    day = parse_date(day)
    start = parse_date(product.start_date, 'start_date')
    end = parse_date(product.end_date, 'end_date') if product.end_date else None

    if day < start or (end is not None and day > end):
        return False
    return weekday_number(day) in parse_weekdays(product.days_of_week)


def format_progress(progress: dict, template: Optional[str] = None) -> str:
    """Render ``{'current', 'total'}`` through ``MEETING_PROGRESS_TEMPLATE``."""
    template = template or settings.MEETING_PROGRESS_TEMPLATE
    return template.format(current=progress['current'], total=progress['total'])
