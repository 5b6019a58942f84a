"""
Event serializers for role-aware presentation, creation and updates.
"""
from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from apps.common.exceptions import Forbidden
from apps.common.serializers import PatchSerializer, StrictBooleanField, StrictIntegerField
from apps.users.models import User
from ..models import Event
from ..services import EventService


class EventPersonSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'utorid', 'name']
        read_only_fields = fields


class EventBaseSerializer(serializers.ModelSerializer):
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    pointsRemain = serializers.IntegerField(source='points_remain', read_only=True)
    pointsAwarded = serializers.IntegerField(source='points_awarded', read_only=True)
    numGuests = serializers.SerializerMethodField()
    organizers = serializers.SerializerMethodField()
    guests = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = ['id']

    def get_numGuests(self, obj):
        count = getattr(obj, 'num_guests', None)
        return obj.guest_count() if count is None else count

    def get_organizers(self, obj):
        users = [link.user for link in obj.organizers.select_related('user')]
        return EventPersonSerializer(users, many=True).data

    def get_guests(self, obj):
        users = [link.user for link in obj.guests.select_related('user')]
        return EventPersonSerializer(users, many=True).data


class EventSerializer(EventBaseSerializer):
    """
    Full event shape for managers and organizers.
    Used for: POST /events, GET/PATCH /events/{id}
    """

    class Meta(EventBaseSerializer.Meta):
        fields = [
            'id', 'name', 'description', 'location', 'startTime', 'endTime', 'capacity',
            'pointsRemain', 'pointsAwarded', 'published', 'organizers', 'guests',
        ]
        read_only_fields = fields


class EventPublicSerializer(EventBaseSerializer):
    """Event shape for regular users: no budget or guest identities"""

    class Meta(EventBaseSerializer.Meta):
        fields = [
            'id', 'name', 'description', 'location', 'startTime', 'endTime', 'capacity',
            'organizers', 'numGuests',
        ]
        read_only_fields = fields


class EventManagerListSerializer(EventBaseSerializer):
    class Meta(EventBaseSerializer.Meta):
        fields = [
            'id', 'name', 'location', 'startTime', 'endTime', 'capacity',
            'pointsRemain', 'pointsAwarded', 'published', 'numGuests',
        ]
        read_only_fields = fields


class EventListSerializer(EventBaseSerializer):
    class Meta(EventBaseSerializer.Meta):
        fields = ['id', 'name', 'location', 'startTime', 'endTime', 'capacity', 'numGuests']
        read_only_fields = fields


class EventOrganizersSerializer(EventBaseSerializer):
    """Response of POST /events/{id}/organizers"""

    class Meta(EventBaseSerializer.Meta):
        fields = ['id', 'name', 'location', 'organizers']
        read_only_fields = fields


class EventCreateSerializer(serializers.Serializer):
    """Validates POST /events"""
    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    location = serializers.CharField(max_length=255)
    startTime = serializers.DateTimeField(source='start_time')
    endTime = serializers.DateTimeField(source='end_time')
    capacity = StrictIntegerField(min_value=1, required=False, allow_null=True)
    points = StrictIntegerField(min_value=1, source='points_total')

    def validate(self, attrs):
        if attrs['end_time'] <= attrs['start_time']:
            raise serializers.ValidationError("endTime must be after startTime.")
        return attrs

    def create(self, validated_data):
        return Event.objects.create(
            points_remain=validated_data['points_total'], points_awarded=0, published=False, **validated_data
        )


class EventUpdateSerializer(PatchSerializer):
    """
    Validates PATCH /events/{id}.

    Descriptive fields, ``startTime`` and ``capacity`` freeze once the event
    starts; ``endTime`` freezes once it ends. Only managers may publish or
    change the points budget.
    """
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False)
    startTime = serializers.DateTimeField(source='start_time', required=False)
    endTime = serializers.DateTimeField(source='end_time', required=False)
    capacity = StrictIntegerField(min_value=1, required=False)
    published = StrictBooleanField(required=False)
    points = StrictIntegerField(min_value=1, source='points_total', required=False)

    FROZEN_AFTER_START = ('name', 'description', 'location', 'start_time', 'capacity')
    MANAGER_ONLY = ('published', 'points')

    def to_internal_value(self, data):
        if isinstance(data, dict) and not self.context['actor'].is_manager:
            if any(data.get(key) is not None for key in self.MANAGER_ONLY):
                raise Forbidden()
        return super().to_internal_value(data)

    def validate_published(self, value):
        if value is not True:
            raise serializers.ValidationError("published can only be set to true.")
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        event = self.instance
        now = self.context.get('now') or timezone.now()

        if event.has_started(now):
            frozen = [key for key in self.FROZEN_AFTER_START if key in attrs]
            if frozen:
                raise serializers.ValidationError(f"{frozen[0]} cannot change after the event has started.")
        if 'end_time' in attrs and event.has_ended(now):
            raise serializers.ValidationError("endTime cannot change after the event has ended.")

        start_time = attrs.get('start_time', event.start_time)
        if 'start_time' in attrs and start_time <= now:
            raise serializers.ValidationError("startTime must be in the future.")
        end_time = attrs.get('end_time', event.end_time)
        if end_time <= start_time:
            raise serializers.ValidationError("endTime must be after startTime.")

        capacity = attrs.get('capacity')
        if capacity is not None and capacity < event.guest_count():
            raise serializers.ValidationError("capacity cannot be below the current number of guests.")

        return attrs

    @transaction.atomic
    def update(self, instance, validated_data):
        fields = {key: value for key, value in validated_data.items() if key != 'points_total'}
        if 'points_total' in validated_data:
            instance = EventService.change_budget(instance, validated_data['points_total'])
        if fields:
            instance = super().update(instance, fields)
        return instance
