"""
Promotion models module.

All models are exported from this module to maintain backward compatibility.
"""
from .promotion import Promotion, PromotionType, PromotionQuerySet, UserPromotionUsage

__all__ = [
    'Promotion',
    'PromotionType',
    'PromotionQuerySet',
    'UserPromotionUsage',
]
