# ==========================================
# apps/registrations/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid
import secrets


class PaymentStatus(models.TextChoices):
    """Payment status of a registration, labelled as shown on reports."""
    FULL = 'full', 'מלא'
    PARTIAL = 'partial', 'חלקי'
    OVER = 'over', 'יתר'
    FULL_DISCOUNTED = 'full_discounted', 'מלא / הנחה'
    PARTIAL_DISCOUNTED = 'partial_discounted', 'חלקי / הנחה'
    DISCOUNT_ONLY = 'discount_only', 'הנחה'


class PaymentKind(models.TextChoices):
    PAYMENT = 'payment', 'Payment'
    DISCOUNT = 'discount', 'Discount'


class DeclarationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SENT = 'sent', 'Sent'
    SIGNED = 'signed', 'Signed'


def generate_declaration_token():
    return secrets.token_urlsafe(24)


class Participant(models.Model):
    """A swimmer who can be registered to products."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    id_number = models.CharField(max_length=20, unique=True, db_index=True)
    phone = models.CharField(max_length=20, blank=True)
    health_approval = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'participants'
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


class Registration(models.Model):
    """
    Enrollment of a participant in a product.

    ``required_amount`` is the raw price owed. A discount only reduces it
    once ``discount_approved`` is set.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(
        'programs.Product',
        on_delete=models.CASCADE,
        related_name='registrations'
    )
    participant = models.ForeignKey(
        Participant,
        on_delete=models.CASCADE,
        related_name='registrations'
    )

    required_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    discount_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    discount_approved = models.BooleanField(default=False)

    registration_date = models.DateField(default=timezone.localdate)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'registrations'
        unique_together = [['product', 'participant']]
        indexes = [
            models.Index(fields=['product', 'registration_date'], name='registratio_product_2f6a1b_idx'),
        ]
        ordering = ['-registration_date', '-created_at']

    def __str__(self):
        return f"{self.participant_id} in {self.product_id}"

    @property
    def effective_required_amount(self):
        from apps.registrations.services.payment_status import effective_required_amount
        return effective_required_amount(self)


class Payment(models.Model):
    """
    A money receipt (or a discount bookkeeping row) for a registration.

    Only ``kind == payment`` rows are real money; totals and receipt
    listings ignore discount rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    registration = models.ForeignKey(
        Registration,
        on_delete=models.CASCADE,
        related_name='payments'
    )
    kind = models.CharField(
        max_length=20,
        choices=PaymentKind.choices,
        default=PaymentKind.PAYMENT
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    receipt_number = models.CharField(max_length=50, blank=True)
    payment_date = models.DateField(default=timezone.localdate)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['registration', 'kind'], name='payments_registr_8c3e5d_idx'),
            models.Index(fields=['receipt_number'], name='payments_receipt_1a7f42_idx'),
        ]
        ordering = ['payment_date', 'created_at']

    def __str__(self):
        return f"{self.amount} ({self.kind}) for {self.registration_id}"


class HealthDeclaration(models.Model):
    """Parent-signed health declaration reached through a one-time token link."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    participant = models.ForeignKey(
        Participant,
        on_delete=models.CASCADE,
        related_name='health_declarations'
    )
    token = models.CharField(
        max_length=64,
        unique=True,
        db_index=True,
        default=generate_declaration_token,
        editable=False
    )
    form_status = models.CharField(
        max_length=20,
        choices=DeclarationStatus.choices,
        default=DeclarationStatus.PENDING
    )

    parent_name = models.CharField(max_length=200, blank=True)
    parent_id = models.CharField(max_length=20, blank=True)
    notes = models.TextField(blank=True)
    signature = models.TextField(blank=True)
    submission_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'health_declarations'
        ordering = ['-created_at']

    def __str__(self):
        return f"Health declaration for {self.participant} ({self.form_status})"

    @property
    def is_signed(self):
        return self.form_status == DeclarationStatus.SIGNED
