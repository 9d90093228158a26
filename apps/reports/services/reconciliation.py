"""
Aggregate Reconciler
====================

Rolls per-registration payment facts up into cohort totals (per product,
per season or for any filtered selection) and resolves registrations into
report details.

Functions:
    summarize: Totals for one cohort of registrations.
    combine: Merge the summaries of two disjoint cohorts.
    build_registration_details: Resolve links and evaluate each registration.

Money is always ``Decimal``. ``fill_rate`` is a float, or ``None`` when the
cohort is not a single product.

Note:
    ``summarize(A + B) == combine(summarize(A), summarize(B))`` for disjoint
    cohorts A and B, apart from ``fill_rate`` which ``combine`` drops.
"""

import logging
from typing import Iterable, Mapping, Optional

from apps.registrations.services.payment_status import (
    ZERO,
    effective_required_amount,
    evaluate,
    real_payments,
    total_paid,
)

from .exceptions import MissingLinkageError

logger = logging.getLogger(__name__)


def empty_summary() -> dict:
    return {
        'count': 0,
        'total_expected': ZERO,
        'total_paid': ZERO,
        'difference': ZERO,
        'fill_rate': None,
    }


def summarize(registrations: Iterable, payments_by_registration: Mapping, product=None) -> dict:
    """
    Summarize a cohort of registrations.

    Args:
        registrations: Registrations in the cohort.
        payments_by_registration: ``{registration_id: payments}``; payments
            of every kind may be included, only real money is counted.
        product: The product when the cohort is exactly one product's
            registrations; enables ``fill_rate``.

    Returns:
        dict: ``count``, ``total_expected`` (after approved discounts),
        ``total_paid`` (real money only), ``difference``
        (``total_paid - total_expected``, negative while money is owed) and
        ``fill_rate`` (``count / max_participants`` or ``None``).

    Raises:
        InvalidAmountError: If a registration or payment carries a negative amount.
    """
    count = 0
    total_expected = ZERO
    paid = ZERO

    for registration in registrations:
        count += 1
        total_expected += effective_required_amount(registration)
        paid += total_paid(real_payments(payments_by_registration.get(registration.id, ())))

    fill_rate = None
    if product is not None and product.max_participants:
        fill_rate = count / product.max_participants

    return {
        'count': count,
        'total_expected': total_expected,
        'total_paid': paid,
        'difference': paid - total_expected,
        'fill_rate': fill_rate,
    }


def combine(a: dict, b: dict) -> dict:
    """Merge two summaries of disjoint cohorts; ``fill_rate`` is not carried."""
    total_expected = a['total_expected'] + b['total_expected']
    paid = a['total_paid'] + b['total_paid']
    return {
        'count': a['count'] + b['count'],
        'total_expected': total_expected,
        'total_paid': paid,
        'difference': paid - total_expected,
        'fill_rate': None,
    }


def build_registration_details(registrations: Iterable, snapshot) -> tuple:
    """
    Resolve each registration against ``snapshot`` and evaluate its status.

    Registrations whose participant, product or season is missing are
    skipped and logged.

    Returns:
        tuple: ``(details, skipped)`` where ``details`` is a list of dicts
        in input order with ``registration``, ``participant``, ``product``,
        ``season``, ``payments`` (real money only), ``paid``, ``expected``
        and ``status``; ``skipped`` is the number of dropped registrations.
    """
    details = []
    skipped = 0

    for registration in registrations:
        try:
            participant, product, season = snapshot.resolve(registration)
        except MissingLinkageError as e:
            skipped += 1
            logger.warning("Skipping registration in report: %s", e)
            continue

        payments = real_payments(snapshot.payments_for(registration))
        details.append({
            'registration': registration,
            'participant': participant,
            'product': product,
            'season': season,
            'payments': payments,
            **evaluate(registration, payments),
        })

    return details, skipped


def summarize_details(details: Iterable, product: Optional[object] = None) -> dict:
    """``summarize`` for already-resolved details."""
    details = list(details)
    return summarize(
        [d['registration'] for d in details],
        {d['registration'].id: d['payments'] for d in details},
        product=product,
    )
