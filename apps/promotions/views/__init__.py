"""
Promotion views module.

All views are exported from this module to maintain backward compatibility.
"""
from .promotion_views import PromotionListCreateView, PromotionDetailView

__all__ = [
    'PromotionListCreateView',
    'PromotionDetailView',
]
