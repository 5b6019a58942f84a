"""
Promotion serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .promotion_serializers import (
    PromotionSerializer, PromotionListSerializer, AvailablePromotionSerializer,
    UserPromotionSerializer, PromotionCreateSerializer, PromotionUpdateSerializer,
)

__all__ = [
    'PromotionSerializer',
    'PromotionListSerializer',
    'AvailablePromotionSerializer',
    'UserPromotionSerializer',
    'PromotionCreateSerializer',
    'PromotionUpdateSerializer',
]
