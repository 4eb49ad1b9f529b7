from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Order, OrderItem


class OrderRepositoryProtocol(Protocol):
    def create(self, **data) -> "Order":
        ...

    def get(self, **filters) -> Optional["Order"]:
        ...

    def get_with_items(self, order_id: int) -> Optional["Order"]:
        ...

    def list_for_user(self, user_id: int) -> Iterable["Order"]:
        ...

    def get_for_update(self, order_id: int) -> Optional["Order"]:
        ...

    def list_available_for_couriers(self) -> Iterable["Order"]:
        ...

    def list_deliveries(self, courier_id: int) -> Iterable["Order"]:
        ...

    def update(self, obj: "Order", **data) -> "Order":
        ...


class OrderItemRepositoryProtocol(Protocol):
    def bulk_create(self, objs: List["OrderItem"]) -> List["OrderItem"]:
        ...
