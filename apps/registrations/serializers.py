from rest_framework import serializers
from .models import (
    Participant,
    Registration,
    Payment,
    HealthDeclaration,
    PaymentStatus,
)


class ParticipantSerializer(serializers.ModelSerializer):
    """Serializer for participants."""

    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Participant
        fields = [
            'id',
            'first_name',
            'last_name',
            'full_name',
            'id_number',
            'phone',
            'health_approval',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_id_number(self, value):
        return value.strip()


class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for recorded payments."""

    class Meta:
        model = Payment
        fields = [
            'id',
            'registration',
            'kind',
            'amount',
            'receipt_number',
            'payment_date',
            'notes',
            'created_at',
        ]
        read_only_fields = fields


class RegistrationSerializer(serializers.ModelSerializer):
    """Main serializer for registrations, with payments and the effective amount."""

    participant_name = serializers.CharField(source='participant.full_name', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    effective_required_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        read_only=True
    )
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Registration
        fields = [
            'id',
            'product',
            'product_name',
            'participant',
            'participant_name',
            'required_amount',
            'discount_amount',
            'discount_approved',
            'effective_required_amount',
            'registration_date',
            'notes',
            'payments',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'product',
            'participant',
            'discount_approved',
            'created_at',
            'updated_at',
        ]


class RegistrationCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating registrations; ``required_amount`` defaults to the product price."""

    required_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False
    )

    class Meta:
        model = Registration
        fields = [
            'product',
            'participant',
            'required_amount',
            'discount_amount',
            'registration_date',
            'notes',
        ]
        # Duplicates are reported by register_participant
        validators = []


# =============================================================================
# Input serializers
# =============================================================================

class RegistrationFilterSerializer(serializers.Serializer):
    """Query parameters for the registration list."""

    product = serializers.UUIDField(required=False)
    participant = serializers.UUIDField(required=False)
    season = serializers.UUIDField(required=False)


class PaymentCreateSerializer(serializers.Serializer):
    """Input for recording a payment."""

    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    receipt_number = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    payment_date = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class DiscountSerializer(serializers.Serializer):
    """Input for approving a discount."""

    amount = serializers.DecimalField(max_digits=10, decimal_places=2)


class HealthDeclarationCreateSerializer(serializers.Serializer):
    participant = serializers.PrimaryKeyRelatedField(queryset=Participant.objects.all())


class HealthDeclarationSubmitSerializer(serializers.Serializer):
    """Parent's answers on the public health form."""

    parent_name = serializers.CharField(max_length=200)
    parent_id = serializers.CharField(max_length=20)
    signature = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


# =============================================================================
# Response serializers
# =============================================================================

class RegistrationStatusSerializer(serializers.Serializer):
    paid = serializers.DecimalField(max_digits=12, decimal_places=2)
    expected = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.ChoiceField(choices=PaymentStatus.choices)
    status_label = serializers.CharField()
    required_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    discount_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    receipt_numbers = serializers.ListField(child=serializers.CharField())


class HealthDeclarationSerializer(serializers.ModelSerializer):
    """Staff view of a health declaration, including its form link token."""

    participant_name = serializers.CharField(source='participant.full_name', read_only=True)

    class Meta:
        model = HealthDeclaration
        fields = [
            'id',
            'participant',
            'participant_name',
            'token',
            'form_status',
            'parent_name',
            'parent_id',
            'notes',
            'submission_date',
            'created_at',
        ]
        read_only_fields = fields


class HealthDeclarationPublicSerializer(serializers.ModelSerializer):
    """What a parent sees when opening the form link."""

    participant_name = serializers.CharField(source='participant.full_name', read_only=True)

    class Meta:
        model = HealthDeclaration
        fields = ['participant_name', 'form_status', 'submission_date']
        read_only_fields = fields


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
