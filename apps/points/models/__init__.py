"""
Points models module.

All models are exported from this module to maintain backward compatibility.
"""
from .transaction import TransactionType, TransactionQuerySet, Transaction, TransactionPromotion

__all__ = [
    'TransactionType',
    'TransactionQuerySet',
    'Transaction',
    'TransactionPromotion',
]
