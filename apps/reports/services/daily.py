"""
Daily activity board.

Lists the products that hold a meeting on a given day together with
their participant count and meeting progress.
"""

from collections import Counter
from datetime import time

from apps.programs.services import compute_progress, format_progress, meets_on, parse_date


def get_daily_activities(day, products, registrations) -> list:
    """
    Products meeting on ``day``, ordered by start time.

    Args:
        day (date | str): The day to show.
        products: Candidate products (e.g. one pool's products).
        registrations: Registrations of those products, used for counts.

    Returns:
        list[dict]: ``product``, ``start_time``, ``participants_count``,
        ``current_meeting``, ``total_meetings`` and ``progress_label``.

    Raises:
        ScheduleError: On an invalid day or product schedule.
    """
    day = parse_date(day)
    counts = Counter(r.product_id for r in registrations)

    activities = []
    for product in products:
        if not meets_on(product, day):
            continue
        progress = compute_progress(product, day)
        activities.append({
            'product': product,
            'start_time': product.start_time,
            'participants_count': counts.get(product.id, 0),
            'current_meeting': progress['current'],
            'total_meetings': progress['total'],
            'progress_label': format_progress(progress),
        })

    activities.sort(key=lambda a: (a['start_time'] is None, a['start_time'] or time.min, a['product'].name))
    return activities
