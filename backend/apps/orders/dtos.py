from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass
class OrderItemDTO:
    product_id: Optional[int]
    product_name: str
    quantity: int
    price: Decimal
    variations: Dict[str, Any]


@dataclass
class OrderDTO:
    id: int
    user_id: int
    status: str
    channel: str
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    items: List[OrderItemDTO]
    created_at: Optional[str]
    courier_id: Optional[int] = None
    possession_confirmed_at: Optional[str] = None
    delivered_at: Optional[str] = None
