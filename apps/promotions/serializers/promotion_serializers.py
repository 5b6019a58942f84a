"""
Promotion serializers for presentation, creation and lifecycle-aware updates.
"""
from django.utils import timezone
from rest_framework import serializers

from apps.common.serializers import PatchSerializer, StrictDecimalField, StrictIntegerField
from ..models import Promotion, PromotionType

API_TYPES = ['automatic', 'one-time']
# Upper bound of the points column
MAX_BONUS_POINTS = 2147483647


class PromotionSerializer(serializers.ModelSerializer):
    """
    Full promotion shape.
    Used for: POST /promotions, GET/PATCH /promotions/{id}
    """
    type = serializers.CharField(source='api_type', read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    minSpending = serializers.DecimalField(source='min_spending', max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Promotion
        fields = ['id', 'name', 'description', 'type', 'startTime', 'endTime', 'minSpending', 'rate', 'points']
        read_only_fields = fields


class PromotionListSerializer(PromotionSerializer):
    """Manager list rows (no description)"""

    class Meta(PromotionSerializer.Meta):
        fields = ['id', 'name', 'type', 'startTime', 'endTime', 'minSpending', 'rate', 'points']
        read_only_fields = fields


class AvailablePromotionSerializer(PromotionSerializer):
    """Rows shown to regular users and cashiers: usable promotions only"""

    class Meta(PromotionSerializer.Meta):
        fields = ['id', 'name', 'type', 'endTime', 'minSpending', 'rate', 'points']
        read_only_fields = fields


class UserPromotionSerializer(PromotionSerializer):
    """One-time promotions embedded in a user profile"""

    class Meta(PromotionSerializer.Meta):
        fields = ['id', 'name', 'startTime', 'endTime', 'minSpending', 'rate', 'points']
        read_only_fields = fields


def _api_type(value):
    promotion_type = PromotionType.from_api(value)
    if promotion_type is None:
        raise serializers.ValidationError("type must be 'automatic' or 'one-time'.")
    return promotion_type.value


class PromotionCreateSerializer(serializers.Serializer):
    """Validates POST /promotions"""
    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    type = serializers.CharField()
    startTime = serializers.DateTimeField(source='start_time')
    endTime = serializers.DateTimeField(source='end_time')
    minSpending = StrictDecimalField(
        source='min_spending', max_digits=12, decimal_places=2, required=False, allow_null=True
    )
    rate = StrictDecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    points = StrictIntegerField(min_value=0, max_value=MAX_BONUS_POINTS, required=False, allow_null=True)

    def validate_type(self, value):
        return _api_type(value)

    def validate_minSpending(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("minSpending must be positive.")
        return value

    def validate_rate(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("rate must be positive.")
        return value

    def validate(self, attrs):
        now = self.context.get('now') or timezone.now()
        if attrs['start_time'] <= now:
            raise serializers.ValidationError("startTime must be in the future.")
        if attrs['end_time'] <= attrs['start_time']:
            raise serializers.ValidationError("endTime must be after startTime.")
        return attrs

    def create(self, validated_data):
        return Promotion.objects.create(**validated_data)


class PromotionUpdateSerializer(PatchSerializer):
    """
    Validates PATCH /promotions/{id}.

    Before the start time every field may change. Once started, ``type`` and
    ``startTime`` are rejected and a new ``endTime`` must still lie in the
    future. Once ended only ``name`` and ``description`` are applied.
    """
    nullable_fields = ('minSpending', 'rate', 'points')

    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False)
    type = serializers.CharField(required=False)
    startTime = serializers.DateTimeField(source='start_time', required=False)
    endTime = serializers.DateTimeField(source='end_time', required=False)
    minSpending = StrictDecimalField(
        source='min_spending', max_digits=12, decimal_places=2, required=False, allow_null=True
    )
    rate = StrictDecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    points = StrictIntegerField(min_value=0, max_value=MAX_BONUS_POINTS, required=False, allow_null=True)

    ALWAYS_MUTABLE = ('name', 'description')
    FROZEN_AFTER_START = {'type': 'type', 'start_time': 'startTime'}

    def validate_type(self, value):
        return _api_type(value)

    def validate_minSpending(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("minSpending must be positive.")
        return value

    def validate_rate(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("rate must be positive.")
        return value

    def validate(self, attrs):
        promotion = self.instance
        now = self.context.get('now') or timezone.now()

        if promotion.has_ended(now):
            attrs = {key: value for key, value in attrs.items() if key in self.ALWAYS_MUTABLE}
        elif promotion.has_started(now):
            frozen = [name for key, name in self.FROZEN_AFTER_START.items() if key in attrs]
            if frozen:
                raise serializers.ValidationError(f"{frozen[0]} cannot change after the promotion has started.")
            end_time = attrs.get('end_time')
            if end_time is not None and not (end_time > now and end_time > promotion.start_time):
                raise serializers.ValidationError("endTime must be in the future and after startTime.")
        else:
            start_time = attrs.get('start_time', promotion.start_time)
            if 'start_time' in attrs and start_time <= now:
                raise serializers.ValidationError("startTime must be in the future.")
            end_time = attrs.get('end_time')
            if end_time is not None and not (end_time >= now and end_time > start_time):
                raise serializers.ValidationError("endTime must be in the future and after startTime.")
            if 'start_time' in attrs and end_time is None and promotion.end_time <= start_time:
                raise serializers.ValidationError("startTime must be before endTime.")

        return super().validate(attrs)
