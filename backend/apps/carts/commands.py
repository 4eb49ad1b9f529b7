from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CartItemCommand:
    product_id: int
    quantity: Any = 1
    options: Dict[str, str] = field(default_factory=dict)

    @staticmethod
    def from_raw(raw: Dict[str, Any]) -> "CartItemCommand":
        """Build from validated serializer data (snake_case or camelCase keys)."""
        pid = raw.get("product_id", raw.get("productId"))
        return CartItemCommand(
            product_id=int(pid),
            quantity=raw.get("quantity", 1),
            options=dict(raw.get("options") or {}),
        )
