"""Report filters applied to resolved registration details."""

from apps.registrations.models import PaymentStatus

ALL = 'all'


def _selected(value):
    return bool(value) and str(value) != ALL


def _matches_status(status, wanted):
    wanted = str(wanted)
    return wanted in (status.value, status.label)


def filter_registrations(
    details,
    *,
    search=None,
    receipt_number=None,
    season_id=None,
    product_id=None,
    payment_status=None
) -> list:
    """
    Keep details matching every given filter.

    Args:
        details: Output of ``build_registration_details``.
        search: Case-insensitive match on the full name, or a substring
            of the id number.
        receipt_number: Substring of any real-money receipt number.
        season_id / product_id: Exact id; ``'all'`` or empty means any.
        payment_status: Status value (``'partial'``) or label (``'חלקי'``);
            ``'all'`` or empty means any.
    """
    search = (search or '').strip()
    receipt_number = (receipt_number or '').strip()

    result = []
    for detail in details:
        participant = detail['participant']

        if search:
            name_match = search.lower() in participant.full_name.lower()
            id_match = search in participant.id_number
            if not (name_match or id_match):
                continue

        if receipt_number:
            receipts = [p.receipt_number for p in detail['payments']]
            if not any(receipt_number in r for r in receipts):
                continue

        if _selected(season_id) and str(detail['season'].id) != str(season_id):
            continue

        if _selected(product_id) and str(detail['product'].id) != str(product_id):
            continue

        if _selected(payment_status) and not _matches_status(PaymentStatus(detail['status']), payment_status):
            continue

        result.append(detail)

    return result
