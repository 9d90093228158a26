"""
Payment management service.

Records money received against registrations, approves discounts and
reports the resulting payment status.

A discount is represented only on the registration itself
(``discount_amount`` plus ``discount_approved``); it never produces a
``Payment`` row.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.registrations.models import Payment, PaymentKind, Registration

from .exceptions import InvalidAmountError, PaymentNotFoundError
from .payment_status import ZERO, evaluate, real_payments, to_amount

logger = logging.getLogger(__name__)


def _positive_amount(value, field) -> Decimal:
    amount = to_amount(value, field)
    if amount == ZERO:
        raise InvalidAmountError(f"{field} must be greater than zero")
    return amount


def add_payment(
    *,
    registration: Registration,
    amount,
    receipt_number: str = '',
    payment_date: Optional[date] = None,
    notes: str = ''
) -> Payment:
    """
    Record a real-money payment for a registration.

    Raises:
        InvalidAmountError: If ``amount`` is zero or negative
    """
    amount = _positive_amount(amount, 'amount')

    fields = {
        'registration': registration,
        'kind': PaymentKind.PAYMENT,
        'amount': amount,
        'receipt_number': (receipt_number or '').strip(),
        'notes': notes,
    }
    if payment_date is not None:
        fields['payment_date'] = payment_date

    payment = Payment.objects.create(**fields)

    logger.info(
        "Payment of %s recorded for registration %s (receipt %r)",
        amount, registration.id, payment.receipt_number
    )
    return payment


@transaction.atomic
def apply_discount(*, registration: Registration, amount) -> Registration:
    """
    Approve a discount on a registration.

    Repeated discounts accumulate. The effective required amount never
    drops below zero even if the discounts exceed the price.

    Raises:
        InvalidAmountError: If ``amount`` is zero or negative
    """
    amount = _positive_amount(amount, 'discount amount')

    locked = Registration.objects.select_for_update().get(pk=registration.pk)
    current = to_amount(locked.discount_amount, 'discount_amount') if locked.discount_approved else ZERO
    locked.discount_amount = current + amount
    locked.discount_approved = True
    locked.save(update_fields=['discount_amount', 'discount_approved', 'updated_at'])

    logger.info(
        "Discount of %s approved for registration %s (total discount %s)",
        amount, locked.id, locked.discount_amount
    )
    return locked


@transaction.atomic
def revoke_discount(*, registration: Registration) -> Registration:
    """Withdraw an approved discount; the full required amount is owed again."""
    locked = Registration.objects.select_for_update().get(pk=registration.pk)
    locked.discount_amount = None
    locked.discount_approved = False
    locked.save(update_fields=['discount_amount', 'discount_approved', 'updated_at'])

    logger.info("Discount revoked for registration %s", locked.id)
    return locked


def delete_payment(*, payment_id: UUID) -> None:
    """
    Delete a payment.

    Raises:
        PaymentNotFoundError: If the payment doesn't exist
    """
    deleted, _ = Payment.objects.filter(id=payment_id).delete()
    if not deleted:
        raise PaymentNotFoundError(f"Payment with ID {payment_id} not found")
    logger.info("Payment %s deleted", payment_id)


def get_registration_status(*, registration: Registration) -> dict:
    """
    Payment status of a registration from its stored real-money payments.

    Returns:
        dict: ``paid``, ``expected`` and ``status`` from ``evaluate`` plus
        ``status_label``, ``required_amount``, ``discount_amount`` and
        ``receipt_numbers``.
    """
    payments = real_payments(registration.payments.all())
    details = evaluate(registration, payments)

    return {
        **details,
        'status_label': details['status'].label,
        'required_amount': to_amount(registration.required_amount, 'required_amount'),
        'discount_amount': (
            to_amount(registration.discount_amount, 'discount_amount')
            if registration.discount_approved else ZERO
        ),
        'receipt_numbers': [p.receipt_number for p in payments if p.receipt_number],
    }
