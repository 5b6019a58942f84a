"""
Points serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .transaction_serializers import (
    TransactionSerializer,
    SuspiciousResultSerializer,
    PurchaseResultSerializer,
    AdjustmentResultSerializer,
    RedemptionResultSerializer,
    TransferResultSerializer,
    EventAwardResultSerializer,
)
from .operation_serializers import (
    LedgerRequestSerializer,
    PurchaseSerializer,
    AdjustmentSerializer,
    TransferSerializer,
    RedemptionSerializer,
    EventAwardSerializer,
    ProcessedSerializer,
    SuspiciousSerializer,
)

__all__ = [
    'TransactionSerializer',
    'SuspiciousResultSerializer',
    'PurchaseResultSerializer',
    'AdjustmentResultSerializer',
    'RedemptionResultSerializer',
    'TransferResultSerializer',
    'EventAwardResultSerializer',
    'LedgerRequestSerializer',
    'PurchaseSerializer',
    'AdjustmentSerializer',
    'TransferSerializer',
    'RedemptionSerializer',
    'EventAwardSerializer',
    'ProcessedSerializer',
    'SuspiciousSerializer',
]
