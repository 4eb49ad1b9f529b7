from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass
class OrderLineCommand:
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class PlaceOrderCommand:
    user_id: int
    attempt_id: str
    channel: str
    lines: List[OrderLineCommand]
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    destination: str = ""
    proof_reference: Optional[str] = None
