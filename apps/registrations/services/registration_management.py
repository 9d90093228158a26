"""
Registration management service.

Handles enrolling participants in products with capacity and duplicate
protection.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.programs.models import Product
from apps.registrations.models import Participant, Registration

from .exceptions import (
    DuplicateRegistrationError,
    ProductFullError,
)
from .payment_status import to_amount

logger = logging.getLogger(__name__)


def register_participant(
    *,
    product: Product,
    participant: Participant,
    required_amount: Optional[Decimal] = None,
    discount_amount: Optional[Decimal] = None,
    registration_date: Optional[date] = None,
    notes: str = ''
) -> Registration:
    """
    Register a participant to a product.

    The product row is locked for the duration of the transaction so two
    concurrent enrollments cannot both take the last free place.

    Args:
        product: Product to enroll in
        participant: Participant being enrolled
        required_amount: Amount owed; defaults to the product price
        discount_amount: Requested discount, not approved until
            ``apply_discount`` is called
        registration_date: Defaults to today
        notes: Free text

    Returns:
        Created Registration instance

    Raises:
        DuplicateRegistrationError: If already registered to this product
        ProductFullError: If ``max_participants`` has been reached
        InvalidAmountError: If an amount is negative
    """
    if required_amount is None:
        required_amount = product.price
    required_amount = to_amount(required_amount, 'required_amount')
    if discount_amount is not None:
        discount_amount = to_amount(discount_amount, 'discount_amount')

    with transaction.atomic():
        locked_product = Product.objects.select_for_update().get(pk=product.pk)

        if Registration.objects.filter(product=locked_product, participant=participant).exists():
            raise DuplicateRegistrationError(
                f"{participant.full_name} is already registered to {locked_product.name}"
            )

        if locked_product.registrations.count() >= locked_product.max_participants:
            raise ProductFullError(
                f"{locked_product.name} is full ({locked_product.max_participants} participants)"
            )

        fields = {
            'product': locked_product,
            'participant': participant,
            'required_amount': required_amount,
            'discount_amount': discount_amount,
            'notes': notes,
        }
        if registration_date is not None:
            fields['registration_date'] = registration_date

        try:
            with transaction.atomic():
                registration = Registration.objects.create(**fields)
        except IntegrityError:
            raise DuplicateRegistrationError(
                f"{participant.full_name} is already registered to {locked_product.name}"
            )

    logger.info(
        "Registered participant %s to product %s (required %s)",
        participant.id, locked_product.id, required_amount
    )
    return registration


def search_participants(*, search: Optional[str] = None) -> QuerySet:
    """Participants whose name, id number or phone contains ``search``."""
    queryset = Participant.objects.all()
    if search:
        search = search.strip()
        queryset = queryset.filter(
            Q(first_name__icontains=search) |
            Q(last_name__icontains=search) |
            Q(id_number__icontains=search) |
            Q(phone__icontains=search)
        )
    return queryset
