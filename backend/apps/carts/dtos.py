from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class CartLine:
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    image: str = ""
    options: Dict[str, str] = field(default_factory=dict)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["unit_price"] = str(self.unit_price)
        return payload

    @staticmethod
    def from_payload(raw: Mapping[str, Any]) -> Optional["CartLine"]:
        """Rebuild a line from its stored form; malformed entries yield ``None``."""
        if not isinstance(raw, Mapping):
            return None
        try:
            price = Decimal(str(raw["unit_price"]))
            quantity = int(raw["quantity"])
        except (KeyError, TypeError, ValueError, InvalidOperation):
            return None
        if quantity <= 0 or raw.get("product_id") in (None, ""):
            return None
        options = raw.get("options") or {}
        return CartLine(
            product_id=str(raw["product_id"]),
            name=str(raw.get("name", "")),
            unit_price=price,
            quantity=quantity,
            image=str(raw.get("image") or ""),
            options={str(k): str(v) for k, v in dict(options).items()},
        )


@dataclass(frozen=True)
class CartTotals:
    count: int
    subtotal: Decimal
    shipping: Decimal
    total: Decimal


@dataclass
class CartDTO:
    lines: List[CartLine]
    totals: CartTotals
