from rest_framework import serializers
from .models import Season, Pool, Product, ProductType, Weekday
from .services import normalize_weekdays, ScheduleError


def _validate_weekdays(value):
    try:
        return normalize_weekdays(value)
    except ScheduleError as e:
        raise serializers.ValidationError(str(e))


class SeasonSerializer(serializers.ModelSerializer):
    """Serializer for seasons."""

    class Meta:
        model = Season
        fields = ['id', 'name', 'start_date', 'end_date', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date cannot be before start date.'})
        return attrs


class PoolSerializer(serializers.ModelSerializer):
    """Serializer for pools."""

    season_name = serializers.CharField(source='season.name', read_only=True, default=None)

    class Meta:
        model = Pool
        fields = ['id', 'name', 'season', 'season_name', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class ProductSerializer(serializers.ModelSerializer):
    """
    Main serializer for products.

    ``days_of_week`` accepts any weekday label form and is stored as
    ``Weekday`` values. ``end_date`` is derived on save.
    """

    days_of_week = serializers.ListField(
        child=serializers.CharField(),
        required=False
    )
    season_name = serializers.CharField(source='season.name', read_only=True)
    pool_name = serializers.CharField(source='pool.name', read_only=True, default=None)
    type_display = serializers.CharField(source='get_type_display', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'type',
            'type_display',
            'season',
            'season_name',
            'pool',
            'pool_name',
            'start_date',
            'end_date',
            'start_time',
            'days_of_week',
            'meetings_count',
            'price',
            'discount_amount',
            'max_participants',
            'instructor',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'end_date', 'created_at', 'updated_at']

    def validate_days_of_week(self, value):
        return _validate_weekdays(value)

    def validate(self, attrs):
        pool = attrs.get('pool', getattr(self.instance, 'pool', None))
        season = attrs.get('season', getattr(self.instance, 'season', None))
        if pool is not None and pool.season_id and season and pool.season_id != season.id:
            raise serializers.ValidationError({'pool': 'Pool belongs to a different season.'})
        return attrs


class ProductListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    season_name = serializers.CharField(source='season.name', read_only=True)
    pool_name = serializers.CharField(source='pool.name', read_only=True, default=None)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'type',
            'season',
            'season_name',
            'pool_name',
            'start_date',
            'end_date',
            'start_time',
            'days_of_week',
            'meetings_count',
            'price',
            'max_participants',
        ]
        read_only_fields = fields


# =============================================================================
# Input serializers
# =============================================================================

class ProductFilterSerializer(serializers.Serializer):
    """Query parameters for the product list."""

    season = serializers.UUIDField(required=False)
    pool = serializers.UUIDField(required=False)
    type = serializers.ChoiceField(choices=ProductType.choices, required=False)


class ProgressQuerySerializer(serializers.Serializer):
    """Query parameters for product progress."""

    date = serializers.DateField(required=False, help_text='Reference date (YYYY-MM-DD), defaults to today')


class EndDatePreviewSerializer(serializers.Serializer):
    """Recurrence rule for previewing an end date without saving."""

    start_date = serializers.DateField()
    days_of_week = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    meetings_count = serializers.IntegerField(min_value=1)

    def validate_days_of_week(self, value):
        return _validate_weekdays(value)


# =============================================================================
# Response serializers
# =============================================================================

class ProgressResponseSerializer(serializers.Serializer):
    current = serializers.IntegerField()
    total = serializers.IntegerField()
    label = serializers.CharField()
    reference_date = serializers.DateField()


class EndDatePreviewResponseSerializer(serializers.Serializer):
    end_date = serializers.DateField()
    days_of_week = serializers.ListField(child=serializers.ChoiceField(choices=Weekday.choices))


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
