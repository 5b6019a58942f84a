"""
Points views module.

All views are exported from this module to maintain backward compatibility.
"""
from .transaction_views import (
    TransactionListCreateView, TransactionDetailView, TransactionSuspiciousView, TransactionProcessedView,
)
from .user_transaction_views import MyTransactionListView, UserTransferView, EventTransactionView

__all__ = [
    'TransactionListCreateView',
    'TransactionDetailView',
    'TransactionSuspiciousView',
    'TransactionProcessedView',
    'MyTransactionListView',
    'UserTransferView',
    'EventTransactionView',
]
