"""
Health declaration service.

Issues tokenised form links for parents and records signed declarations.
Delivering the link (SMS, e-mail) is left to the office staff.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.registrations.models import (
    DeclarationStatus,
    HealthDeclaration,
    Participant,
)

from .exceptions import (
    DeclarationAlreadySignedError,
    DeclarationNotFoundError,
)

logger = logging.getLogger(__name__)


def create_declaration_link(*, participant: Participant) -> HealthDeclaration:
    """
    Return an open declaration for the participant, creating one if needed.

    An unsigned (pending or sent) declaration is reused so a parent never
    holds two live links for the same child.
    """
    declaration = (
        participant.health_declarations
        .exclude(form_status=DeclarationStatus.SIGNED)
        .order_by('-created_at')
        .first()
    )
    if declaration is not None:
        return declaration

    declaration = HealthDeclaration.objects.create(participant=participant)
    logger.info("Health declaration link issued for participant %s", participant.id)
    return declaration


def get_declaration_by_token(*, token: str) -> HealthDeclaration:
    """
    Raises:
        DeclarationNotFoundError: If no declaration has this token
    """
    try:
        return HealthDeclaration.objects.select_related('participant').get(token=token)
    except HealthDeclaration.DoesNotExist:
        raise DeclarationNotFoundError("Health declaration form not found")


def mark_declaration_sent(*, declaration_id: UUID) -> HealthDeclaration:
    """
    Record that the link was handed to the parent.

    Raises:
        DeclarationNotFoundError: If the declaration doesn't exist
        DeclarationAlreadySignedError: If it was already signed
    """
    try:
        declaration = HealthDeclaration.objects.get(id=declaration_id)
    except HealthDeclaration.DoesNotExist:
        raise DeclarationNotFoundError(f"Health declaration with ID {declaration_id} not found")

    if declaration.is_signed:
        raise DeclarationAlreadySignedError("Health declaration is already signed")

    declaration.form_status = DeclarationStatus.SENT
    declaration.save(update_fields=['form_status'])
    return declaration


@transaction.atomic
def submit_declaration(
    *,
    token: str,
    parent_name: str,
    parent_id: str,
    signature: str,
    notes: str = ''
) -> HealthDeclaration:
    """
    Sign a health declaration and approve the participant's health status.

    Raises:
        DeclarationNotFoundError: If the token is unknown
        DeclarationAlreadySignedError: If the form was already submitted
    """
    try:
        declaration = (
            HealthDeclaration.objects
            .select_for_update()
            .select_related('participant')
            .get(token=token)
        )
    except HealthDeclaration.DoesNotExist:
        raise DeclarationNotFoundError("Health declaration form not found")

    if declaration.is_signed:
        raise DeclarationAlreadySignedError("Health declaration is already signed")

    declaration.parent_name = parent_name
    declaration.parent_id = parent_id
    declaration.signature = signature
    declaration.notes = notes
    declaration.form_status = DeclarationStatus.SIGNED
    declaration.submission_date = timezone.now()
    declaration.save()

    participant = declaration.participant
    participant.health_approval = True
    participant.save(update_fields=['health_approval', 'updated_at'])

    logger.info("Health declaration signed for participant %s", participant.id)
    return declaration
