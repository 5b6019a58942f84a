"""
Promotion services module.

All services are exported from this module to maintain backward compatibility.
"""
from .promotion_evaluator import PromotionEvaluator, round_half_up, SPEND_PER_POINT, RATE_SCALE

__all__ = [
    'PromotionEvaluator',
    'round_half_up',
    'SPEND_PER_POINT',
    'RATE_SCALE',
]
