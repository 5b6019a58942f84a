"""
Common serializers module.
"""
from .fields import PointsAmountField, StrictIntegerField, StrictBooleanField, StrictDecimalField
from .patch import PatchSerializer

__all__ = [
    'PointsAmountField',
    'StrictIntegerField',
    'StrictBooleanField',
    'StrictDecimalField',
    'PatchSerializer',
]
