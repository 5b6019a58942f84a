"""
Ledger operations.

Each operation is an immutable request carrying exactly the fields it needs;
``LedgerService.apply`` executes it.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Purchase:
    actor: Any
    utorid: str
    spent: Decimal
    promotion_ids: Tuple[int, ...] = field(default_factory=tuple)
    remark: str = ''
    suspicious: bool = False


@dataclass(frozen=True)
class Adjustment:
    actor: Any
    utorid: str
    amount: int
    related_id: Optional[int] = None
    remark: str = ''
    suspicious: bool = False


@dataclass(frozen=True)
class Transfer:
    sender: Any
    recipient_id: int
    amount: int
    remark: str = ''


@dataclass(frozen=True)
class RedemptionRequest:
    user: Any
    amount: int
    remark: str = ''


@dataclass(frozen=True)
class RedemptionProcessing:
    actor: Any
    transaction_id: int


@dataclass(frozen=True)
class EventAward:
    """Award ``amount`` to one guest (``utorid``) or, when it is None, to every guest"""
    actor: Any
    event_id: int
    amount: int
    utorid: Optional[str] = None
    remark: str = ''


@dataclass(frozen=True)
class SuspiciousToggle:
    actor: Any
    transaction_id: int
    suspicious: bool

