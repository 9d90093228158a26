"""
Payment Status Evaluator
========================

Classifies a registration's payment situation from its required amount,
its discount and the payments recorded against it.

Decision table (first match wins)::

    discount approved, paid >= effective  -> FULL_DISCOUNTED
    discount approved, paid <  effective  -> PARTIAL_DISCOUNTED
    not approved,      paid >  required   -> OVER
    not approved,      paid == required   -> FULL
    not approved,      paid <  required   -> PARTIAL

where ``effective = max(0, required - discount)`` when the discount is
approved and ``required`` otherwise. ``DISCOUNT_ONLY`` is never produced
by this table; it is kept only as a display label.

``evaluate`` sums whatever payments it is given. Callers that hold
discount bookkeeping rows must pass ``real_payments(payments)``.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable

from apps.registrations.models import PaymentKind, PaymentStatus
from .exceptions import InvalidAmountError


ZERO = Decimal('0.00')


def to_amount(value, field='amount') -> Decimal:
    """
    Coerce ``value`` to a non-negative ``Decimal``; ``None`` counts as zero.

    Raises:
        InvalidAmountError: If the value is negative or not a number.
    """
    if value is None:
        return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(f"{field} is not a number: {value!r}")
    if not amount.is_finite():
        raise InvalidAmountError(f"{field} is not a number: {value!r}")
    if amount < 0:
        raise InvalidAmountError(f"{field} cannot be negative, got {amount}")
    return amount


def effective_required_amount(registration) -> Decimal:
    """Required amount after an approved discount, never below zero."""
    required = to_amount(registration.required_amount, 'required_amount')
    discount = to_amount(registration.discount_amount, 'discount_amount')
    if not registration.discount_approved:
        return required
    return max(ZERO, required - discount)


def real_payments(payments: Iterable) -> list:
    """Only the rows that represent money actually received."""
    return [p for p in payments if getattr(p, 'kind', PaymentKind.PAYMENT) == PaymentKind.PAYMENT]


def total_paid(payments: Iterable) -> Decimal:
    total = ZERO
    for payment in payments:
        total += to_amount(payment.amount, 'payment amount')
    return total


def evaluate(registration, payments: Iterable) -> dict:
    """
    Evaluate the payment status of one registration.

    Args:
        registration: Object with ``required_amount``, ``discount_amount``
            and ``discount_approved`` (normally a ``Registration``).
        payments: Payments to sum, already filtered by the caller.

    Returns:
        dict: ``{'paid': Decimal, 'expected': Decimal, 'status': PaymentStatus}``

    Raises:
        InvalidAmountError: If any raw monetary input is negative.

    Example:
        >>> evaluate(registration, real_payments(registration.payments.all()))
        {'paid': Decimal('400.00'), 'expected': Decimal('400.00'),
         'status': PaymentStatus.FULL_DISCOUNTED}
    """
    required = to_amount(registration.required_amount, 'required_amount')
    expected = effective_required_amount(registration)
    paid = total_paid(payments)

    if registration.discount_approved:
        if paid >= expected:
            status = PaymentStatus.FULL_DISCOUNTED
        else:
            status = PaymentStatus.PARTIAL_DISCOUNTED
    elif paid > required:
        status = PaymentStatus.OVER
    elif paid == required:
        status = PaymentStatus.FULL
    else:
        status = PaymentStatus.PARTIAL

    return {
        'paid': paid,
        'expected': expected,
        'status': status,
    }
