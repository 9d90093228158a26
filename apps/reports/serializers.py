from rest_framework import serializers
from apps.registrations.models import PaymentStatus


def _money(**kwargs):
    return serializers.DecimalField(max_digits=12, decimal_places=2, **kwargs)


# =============================================================================
# Input serializers
# =============================================================================

class RegistrationReportQuerySerializer(serializers.Serializer):
    """Report filters; 'all' or empty means no filter."""

    search = serializers.CharField(required=False, allow_blank=True)
    receipt_number = serializers.CharField(required=False, allow_blank=True)
    season = serializers.CharField(required=False, allow_blank=True)
    product = serializers.CharField(required=False, allow_blank=True)
    payment_status = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateField(required=False, help_text='Reference date for meeting progress')

    def _validate_id(self, value):
        if not value or value == 'all':
            return value
        try:
            return str(serializers.UUIDField().to_internal_value(value))
        except serializers.ValidationError:
            raise serializers.ValidationError('Must be a valid UUID or "all".')

    def validate_season(self, value):
        return self._validate_id(value)

    def validate_product(self, value):
        return self._validate_id(value)

    def validate_payment_status(self, value):
        if not value or value == 'all':
            return value
        if value not in PaymentStatus.values and value not in PaymentStatus.labels:
            raise serializers.ValidationError(f'Unknown payment status: {value}')
        return value


class DailyQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False, help_text='Day to show (YYYY-MM-DD), defaults to today')
    pool = serializers.UUIDField(required=False)


# =============================================================================
# Response serializers
# =============================================================================

class SummarySerializer(serializers.Serializer):
    count = serializers.IntegerField()
    total_expected = _money()
    total_paid = _money()
    difference = _money()
    fill_rate = serializers.FloatField(allow_null=True)


class ReportRowSerializer(serializers.Serializer):
    registration_id = serializers.UUIDField()
    participant_name = serializers.CharField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    id_number = serializers.CharField()
    phone = serializers.CharField(allow_blank=True)
    season_id = serializers.UUIDField()
    season_name = serializers.CharField()
    product_id = serializers.UUIDField()
    product_name = serializers.CharField()
    product_type = serializers.CharField()
    required_amount = _money()
    effective_required_amount = _money()
    total_paid = _money()
    discount_amount = _money()
    discount_approved = serializers.BooleanField()
    receipt_numbers = serializers.CharField(allow_blank=True)
    meeting_progress = serializers.CharField()
    payment_status = serializers.CharField()
    payment_status_code = serializers.ChoiceField(choices=PaymentStatus.choices)
    registration_date = serializers.DateField()


class RegistrationReportSerializer(serializers.Serializer):
    rows = ReportRowSerializer(many=True)
    summary = SummarySerializer()
    skipped = serializers.IntegerField()
    currency = serializers.CharField()


class ProductSummarySerializer(SummarySerializer):
    product_id = serializers.UUIDField()
    product_name = serializers.CharField()
    max_participants = serializers.IntegerField()


class SeasonSummarySerializer(serializers.Serializer):
    season_id = serializers.UUIDField()
    season_name = serializers.CharField()
    products = ProductSummarySerializer(many=True)
    total = SummarySerializer()


class DailyActivitySerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_name = serializers.CharField()
    product_type = serializers.CharField()
    pool_name = serializers.CharField(allow_null=True)
    start_time = serializers.TimeField(allow_null=True)
    participants_count = serializers.IntegerField()
    current_meeting = serializers.IntegerField()
    total_meetings = serializers.IntegerField()
    progress_label = serializers.CharField()


class DailyActivitiesSerializer(serializers.Serializer):
    date = serializers.DateField()
    activities = DailyActivitySerializer(many=True)
    total_activities = serializers.IntegerField()
    total_participants = serializers.IntegerField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
