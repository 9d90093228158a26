"""
Report/Export Projection
========================

Flattens registration details into display rows and renders them as CSV.

Row order always follows input order. Registrations that cannot be
resolved are left out and counted in ``skipped``.
"""

import csv
import io
from decimal import Decimal

from apps.programs.services import compute_progress, format_progress
from apps.registrations.services.payment_status import ZERO, to_amount

from .reconciliation import build_registration_details


# (row key, CSV header)
EXPORT_COLUMNS = [
    ('first_name', 'שם פרטי'),
    ('last_name', 'שם משפחה'),
    ('id_number', 'תעודת זהות'),
    ('phone', 'טלפון'),
    ('season_name', 'עונה'),
    ('product_name', 'מוצר'),
    ('product_type', 'סוג מוצר'),
    ('required_amount', 'סכום לתשלום'),
    ('effective_required_amount', 'סכום לאחר הנחה'),
    ('total_paid', 'סכום ששולם'),
    ('discount_amount', 'הנחה'),
    ('receipt_numbers', 'מספרי קבלות'),
    ('meeting_progress', 'מפגש'),
    ('payment_status', 'סטטוס תשלום'),
]

CSV_BOM = '\ufeff'


def detail_to_row(detail: dict, reference_date=None) -> dict:
    """One display row for a resolved registration detail."""
    registration = detail['registration']
    participant = detail['participant']
    product = detail['product']

    if registration.discount_approved:
        discount = to_amount(registration.discount_amount, 'discount_amount')
    else:
        discount = ZERO

    progress = compute_progress(product, reference_date)

    return {
        'registration_id': str(registration.id),
        'participant_name': participant.full_name,
        'first_name': participant.first_name,
        'last_name': participant.last_name,
        'id_number': participant.id_number,
        'phone': participant.phone,
        'season_id': str(detail['season'].id),
        'season_name': detail['season'].name,
        'product_id': str(product.id),
        'product_name': product.name,
        'product_type': product.get_type_display(),
        'required_amount': to_amount(registration.required_amount, 'required_amount'),
        'effective_required_amount': detail['expected'],
        'total_paid': detail['paid'],
        'discount_amount': discount,
        'discount_approved': registration.discount_approved,
        'receipt_numbers': ', '.join(p.receipt_number for p in detail['payments'] if p.receipt_number),
        'meeting_progress': format_progress(progress),
        'payment_status': detail['status'].label,
        'payment_status_code': detail['status'].value,
        'registration_date': registration.registration_date,
    }


def project_details(details, reference_date=None) -> list:
    return [detail_to_row(detail, reference_date) for detail in details]


def project(registrations, snapshot, reference_date=None) -> dict:
    """
    Project registrations into flat report rows.

    Args:
        registrations: Registrations to export, in display order.
        snapshot: ``RegistrationSnapshot`` holding their linked entities.
        reference_date: Day used for meeting progress; defaults to today.

    Returns:
        dict: ``{'rows': [...], 'skipped': int}``

    Raises:
        InvalidAmountError: On negative monetary inputs.
        ScheduleError: On a product whose schedule cannot be evaluated.
    """
    details, skipped = build_registration_details(registrations, snapshot)
    return {
        'rows': project_details(details, reference_date),
        'skipped': skipped,
    }


def _format_cell(value):
    if value is None:
        return ''
    if isinstance(value, Decimal):
        return f'{value:.2f}'
    if isinstance(value, bool):
        return 'כן' if value else 'לא'
    return value


def render_csv(rows, columns=None) -> str:
    """
    Render rows as CSV text with Hebrew headers.

    The text starts with a UTF-8 byte order mark so spreadsheet programs
    pick the right encoding for Hebrew.
    """
    columns = columns or EXPORT_COLUMNS
    buf = io.StringIO()
    buf.write(CSV_BOM)

    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow([header for _, header in columns])
    for row in rows:
        writer.writerow([_format_cell(row.get(key)) for key, _ in columns])

    return buf.getvalue()


def export_filename(day) -> str:
    return f"registrations-report-{day.isoformat()}.csv"