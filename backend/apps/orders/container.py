from __future__ import annotations

from apps.notifications.container import build_notification_service
from .repositories import OrderItemRepository, OrderRepository
from .services import OrderService


def build_order_service() -> OrderService:
    return OrderService(
        orders=OrderRepository(),
        items=OrderItemRepository(),
        notifier=build_notification_service(),
    )
