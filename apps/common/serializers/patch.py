"""
Base serializer for partial updates.
"""
from django.db import transaction
from rest_framework import serializers


class PatchSerializer(serializers.Serializer):
    """
    Validates a PATCH body field by field.

    Keys sent as ``null`` count as absent unless they are listed in
    ``nullable_fields``. A body that sets nothing is rejected. Subclasses
    declare lifecycle rules in ``validate`` against ``self.instance``.
    """
    nullable_fields = ()
    empty_message = 'No fields to update.'

    def to_internal_value(self, data):
        if not isinstance(data, dict):
            raise serializers.ValidationError({'non_field_errors': ['Expected a JSON object.']})
        present = {
            key: value for key, value in data.items()
            if value is not None or key in self.nullable_fields
        }
        return super().to_internal_value(present)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError(self.empty_message)
        return attrs

    def create(self, validated_data):
        raise NotImplementedError('PatchSerializer only updates existing instances')

    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value)
        # Savepoint so a unique-key clash leaves the outer transaction usable
        with transaction.atomic():
            instance.save(update_fields=list(validated_data))
        return instance
