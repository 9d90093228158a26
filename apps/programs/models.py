from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Weekday(models.TextChoices):
    """Meeting days, Sunday first. Saturday is never scheduled."""
    SUNDAY = 'sunday', 'ראשון'
    MONDAY = 'monday', 'שני'
    TUESDAY = 'tuesday', 'שלישי'
    WEDNESDAY = 'wednesday', 'רביעי'
    THURSDAY = 'thursday', 'חמישי'
    FRIDAY = 'friday', 'שישי'
    SATURDAY = 'saturday', 'שבת'


class ProductType(models.TextChoices):
    CAMP = 'camp', 'קייטנה'
    CLUB = 'club', 'חוג'
    COURSE = 'course', 'קורס'


class Season(models.Model):
    """A seasonal program period (e.g. Summer 2024)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    start_date = models.DateField()
    end_date = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'seasons'
        ordering = ['-start_date']

    def __str__(self):
        return self.name


class Pool(models.Model):
    """A pool (venue) where a season's products take place."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    season = models.ForeignKey(
        Season,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='pools'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pools'
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(models.Model):
    """A scheduled course/activity offering with a price and capacity."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    type = models.CharField(
        max_length=20,
        choices=ProductType.choices,
        default=ProductType.COURSE
    )

    season = models.ForeignKey(
        Season,
        on_delete=models.CASCADE,
        related_name='products'
    )
    pool = models.ForeignKey(
        Pool,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products'
    )

    # Schedule
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    start_time = models.TimeField(null=True, blank=True)
    days_of_week = models.JSONField(default=list, blank=True)
    meetings_count = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)]
    )

    # Billing
    price = models.DecimalField(
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
    max_participants = models.PositiveIntegerField(
        default=10,
        validators=[MinValueValidator(1)]
    )

    instructor = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['season', 'start_date'], name='products_season__7d1c2a_idx'),
            models.Index(fields=['pool'], name='products_pool_id_4b9e01_idx'),
        ]
        ordering = ['start_date', 'start_time', 'name']

    def __str__(self):
        return f"{self.name} ({self.get_type_display()})"

    def save(self, *args, **kwargs):
        """
        Derive end_date from the recurrence rule before saving.

        Without a meetings_count the rule runs for DEFAULT_MEETINGS_COUNT
        meetings. Without a schedulable weekday the product ends on its
        start date.
        """
        from apps.programs.services.schedule import compute_end_date

        self.end_date = compute_end_date(
            self.start_date,
            self.days_of_week,
            self.meetings_count or settings.DEFAULT_MEETINGS_COUNT
        )
        super().save(*args, **kwargs)
