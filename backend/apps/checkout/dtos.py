from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from apps.carts.dtos import CartLine, CartTotals
from .states import CheckoutState


@dataclass
class CheckoutAttempt:
    """One payment action. Lives in memory only and is never persisted."""

    attempt_id: str
    user_id: int
    countdown_seconds: int
    state: CheckoutState = CheckoutState.IDLE
    channel: Optional[str] = None
    destination: Optional[str] = None
    proof_reference: Optional[str] = None
    remaining_seconds: int = 0
    lines: List[CartLine] = field(default_factory=list)
    totals: Optional[CartTotals] = None
    order_id: Optional[int] = None
    error: Optional[str] = None

    @property
    def amount(self) -> Decimal:
        return self.totals.total if self.totals else Decimal("0")


@dataclass
class CheckoutStatusDTO:
    attempt_id: str
    state: str
    channel: Optional[str]
    destination: Optional[str]
    has_proof: bool
    countdown_seconds: int
    remaining_seconds: int
    amount: Decimal
    order_id: Optional[int]
    error: Optional[str]
