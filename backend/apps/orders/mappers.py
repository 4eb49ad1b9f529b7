from typing import Iterable, List, Optional

from .dtos import OrderDTO, OrderItemDTO
from .models import Order, OrderItem


class OrderItemMapper:
    @staticmethod
    def to_dto(item: OrderItem) -> OrderItemDTO:
        return OrderItemDTO(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=int(item.quantity),
            price=item.price,
            variations=dict(item.variations or {}),
        )


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


class OrderMapper:
    @staticmethod
    def to_dto(order: Order, items: Optional[Iterable[OrderItem]] = None) -> OrderDTO:
        if items is None:
            items = order.items.all()
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            status=str(order.status),
            channel=str(order.channel),
            subtotal=order.subtotal,
            shipping=order.shipping,
            total=order.total,
            items=[OrderItemMapper.to_dto(item) for item in items],
            created_at=_iso(getattr(order, "created_at", None)),
            courier_id=getattr(order, "courier_id", None),
            possession_confirmed_at=_iso(getattr(order, "possession_confirmed_at", None)),
            delivered_at=_iso(getattr(order, "delivered_at", None)),
        )

    @staticmethod
    def many_to_dto(orders: Iterable[Order]) -> List[OrderDTO]:
        return [OrderMapper.to_dto(o) for o in orders]
