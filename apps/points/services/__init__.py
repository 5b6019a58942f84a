"""
Points services module.

All services are exported from this module to maintain backward compatibility.
"""
from .operations import (
    Purchase, Adjustment, Transfer, RedemptionRequest, RedemptionProcessing, EventAward, SuspiciousToggle,
)
from .ledger_service import LedgerService

__all__ = [
    'Purchase',
    'Adjustment',
    'Transfer',
    'RedemptionRequest',
    'RedemptionProcessing',
    'EventAward',
    'SuspiciousToggle',
    'LedgerService',
]
