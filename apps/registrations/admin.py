# ==========================================
# apps/registrations/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from apps.registrations.models import (
    Participant,
    Registration,
    Payment,
    HealthDeclaration,
    PaymentStatus,
)
from apps.registrations.services import get_registration_status, InvalidAmountError


STATUS_COLORS = {
    PaymentStatus.FULL: 'green',
    PaymentStatus.FULL_DISCOUNTED: 'green',
    PaymentStatus.OVER: 'blue',
    PaymentStatus.PARTIAL: 'orange',
    PaymentStatus.PARTIAL_DISCOUNTED: 'orange',
    PaymentStatus.DISCOUNT_ONLY: 'gray',
}


class PaymentInline(admin.TabularInline):
    """Inline admin for a registration's payments."""
    model = Payment
    extra = 0
    fields = ['kind', 'amount', 'receipt_number', 'payment_date', 'notes']


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """Admin interface for participants."""

    list_display = ['first_name', 'last_name', 'id_number', 'phone', 'health_approval']
    list_filter = ['health_approval']
    search_fields = ['first_name', 'last_name', 'id_number', 'phone']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    """
    Admin interface for registrations.

    Provides:
    - Payment status badge computed from real-money payments
    - Inline payments
    - Bulk action for revoking discounts
    """

    list_display = [
        'participant',
        'product',
        'required_amount',
        'discount_amount',
        'discount_approved',
        'registration_date',
        'status_badge',
    ]
    list_filter = [
        'discount_approved',
        'product__season',
        'product',
    ]
    search_fields = [
        'participant__first_name',
        'participant__last_name',
        'participant__id_number',
        'payments__receipt_number',
    ]
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['participant', 'product']
    inlines = [PaymentInline]
    date_hierarchy = 'registration_date'
    actions = ['revoke_discounts']

    @admin.display(description='Payment status')
    def status_badge(self, obj):
        try:
            status = get_registration_status(registration=obj)['status']
        except InvalidAmountError:
            return '-'
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            STATUS_COLORS.get(status, 'black'),
            status.label
        )

    @admin.action(description='Revoke discount on selected registrations')
    def revoke_discounts(self, request, queryset):
        updated = queryset.update(discount_approved=False, discount_amount=None)
        self.message_user(request, f'{updated} registration(s) no longer have a discount.')


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['registration', 'kind', 'amount', 'receipt_number', 'payment_date']
    list_filter = ['kind', 'payment_date']
    search_fields = ['receipt_number', 'registration__participant__last_name']
    readonly_fields = ['created_at']


@admin.register(HealthDeclaration)
class HealthDeclarationAdmin(admin.ModelAdmin):
    list_display = ['participant', 'form_status', 'parent_name', 'submission_date', 'created_at']
    list_filter = ['form_status']
    search_fields = ['participant__first_name', 'participant__last_name', 'parent_name']
    readonly_fields = ['token', 'submission_date', 'created_at']
