"""
Strict JSON field types shared by the API serializers.
"""
import math

from rest_framework import serializers


class PointsAmountField(serializers.Field):
    """
    A points quantity sent as a JSON number.

    Strings and booleans are rejected; fractional values are truncated toward
    zero.
    """
    default_error_messages = {
        'invalid': 'A numeric value is required.',
    }

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail('invalid')
        if isinstance(data, float) and not math.isfinite(data):
            self.fail('invalid')
        return int(data)

    def to_representation(self, value):
        return value


class StrictIntegerField(serializers.IntegerField):
    """Integer that must arrive as a JSON number with no fractional part."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail('invalid')
        if isinstance(data, float) and not data.is_integer():
            self.fail('invalid')
        return super().to_internal_value(int(data))


class StrictBooleanField(serializers.BooleanField):
    """Boolean that must arrive as a JSON true/false."""

    def to_internal_value(self, data):
        if not isinstance(data, bool):
            self.fail('invalid', input=data)
        return data


class StrictDecimalField(serializers.DecimalField):
    """Decimal that must arrive as a JSON number."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail('invalid')
        if isinstance(data, float) and not math.isfinite(data):
            self.fail('invalid')
        return super().to_internal_value(str(data))
