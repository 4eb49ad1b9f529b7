from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.translation import gettext as _

from apps.common import get_logger
from apps.common.i18n import (
    DELIVERY_NOT_ASSIGNED,
    DELIVERY_STEP_NOT_ALLOWED,
    ORDER_NOT_FOUND,
    PERMISSION_DENIED,
)
from apps.notifications.models import NotificationKind
from apps.notifications.protocols import NotifierProtocol
from .commands import PlaceOrderCommand
from .dtos import OrderDTO
from .mappers import OrderMapper
from .models import DELIVERY_TRANSITIONS, OrderItem, OrderStatus
from .protocols import OrderItemRepositoryProtocol, OrderRepositoryProtocol

logger = get_logger(__name__).bind(component="orders", layer="service")

ErrorTuple = Tuple[str, Any, Optional[Dict[str, Any]]]


class OrderService:
    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        items: OrderItemRepositoryProtocol,
        notifier: Optional[NotifierProtocol] = None,
    ):
        self.orders = orders
        self.items = items
        self.notifier = notifier
        self.logger = logger.bind(service="OrderService")

    def place_order(self, command: PlaceOrderCommand) -> OrderDTO:
        """
        Write the order and its line items in one transaction.

        Replaying the same ``attempt_id`` returns the order already written
        for it. Database errors propagate so the caller can keep the cart.
        """
        with transaction.atomic():
            existing = self.orders.get(attempt_id=command.attempt_id)
            if existing:
                self.logger.info(
                    "Order already placed for attempt",
                    attempt_id=command.attempt_id,
                    order_id=existing.id,
                )
                return OrderMapper.to_dto(existing)
            order = self.orders.create(
                user_id=command.user_id,
                attempt_id=command.attempt_id,
                channel=command.channel,
                status=OrderStatus.PAGO,
                subtotal=command.subtotal,
                shipping=command.shipping,
                total=command.total,
                destination=command.destination or "",
                proof_reference=command.proof_reference or "",
            )
            items = self.items.bulk_create(
                [
                    OrderItem(
                        order_id=order.id,
                        product_id=line.product_id,
                        product_name=line.name,
                        quantity=line.quantity,
                        price=line.unit_price,
                        variations=dict(line.options or {}),
                    )
                    for line in command.lines
                ]
            )
        self.logger.info(
            "Order placed",
            order_id=order.id,
            user_id=command.user_id,
            channel=command.channel,
            items=len(items),
            total=str(command.total),
        )
        self._notify_placed(order)
        return OrderMapper.to_dto(order, items)

    def list_orders(self, user_id: int) -> List[OrderDTO]:
        self.logger.debug("Listing orders", user_id=user_id)
        return OrderMapper.many_to_dto(self.orders.list_for_user(user_id))

    def get_order(
        self, order_id: int, *, viewer_id: Optional[int], viewer_privileged: bool = False
    ) -> Tuple[Optional[OrderDTO], Optional[ErrorTuple]]:
        order = self.orders.get_with_items(order_id)
        # Other users' orders are reported as missing.
        if not order or (order.user_id != viewer_id and not viewer_privileged):
            self.logger.info("Order not found", order_id=order_id, viewer_id=viewer_id)
            return None, ("NOT_FOUND", ORDER_NOT_FOUND, {"id": str(order_id)})
        return OrderMapper.to_dto(order), None

    def list_available_deliveries(self) -> List[OrderDTO]:
        return OrderMapper.many_to_dto(self.orders.list_available_for_couriers())

    def list_deliveries(self, courier_id: int) -> List[OrderDTO]:
        self.logger.debug("Listing deliveries", courier_id=courier_id)
        return OrderMapper.many_to_dto(self.orders.list_deliveries(courier_id))

    def advance_status(
        self,
        order_id: int,
        target: str,
        *,
        actor_id: int,
        actor_is_courier: bool = False,
        actor_privileged: bool = False,
    ) -> Tuple[Optional[OrderDTO], Optional[ErrorTuple]]:
        """
        Move an order one delivery step forward.

        Claiming (ATRIBUIDO) assigns the acting courier. Later steps are
        reserved to that courier; admins may act on any order.
        """
        if not (actor_is_courier or actor_privileged):
            self.logger.warning("Delivery step denied", order_id=order_id, actor_id=actor_id)
            return None, ("FORBIDDEN", PERMISSION_DENIED, None)
        with transaction.atomic():
            order = self.orders.get_for_update(order_id)
            if not order:
                return None, ("NOT_FOUND", ORDER_NOT_FOUND, {"id": str(order_id)})
            current = str(order.status)
            if target not in DELIVERY_TRANSITIONS.get(current, ()):
                self.logger.warning(
                    "Delivery step rejected", order_id=order_id, status=current, target=target
                )
                return None, (
                    "CONFLICT",
                    DELIVERY_STEP_NOT_ALLOWED,
                    {"status": current, "target": str(target)},
                )
            changes: Dict[str, Any] = {"status": target}
            if target == OrderStatus.ATRIBUIDO:
                changes["courier_id"] = actor_id
            elif order.courier_id != actor_id and not actor_privileged:
                self.logger.warning(
                    "Delivery owned by another courier", order_id=order_id, actor_id=actor_id
                )
                return None, ("FORBIDDEN", DELIVERY_NOT_ASSIGNED, {"id": str(order_id)})
            if target == OrderStatus.EM_POSSE:
                changes["possession_confirmed_at"] = timezone.now()
            elif target == OrderStatus.ENTREGUE:
                changes["delivered_at"] = timezone.now()
            order = self.orders.update(order, **changes)
        self.logger.info(
            "Order status advanced", order_id=order_id, status=target, actor_id=actor_id
        )
        self._notify_status(order)
        return OrderMapper.to_dto(order), None

    def _notify_placed(self, order) -> None:
        if not self.notifier:
            return
        try:
            self.notifier.notify(
                order.user_id,
                _("Order confirmed"),
                _("Your order #%(id)s was paid. Total: %(total)s Kz")
                % {"id": order.id, "total": order.total},
                kind=NotificationKind.ORDER,
            )
        except DatabaseError as exc:
            self.logger.warning(
                "Order notification failed", order_id=order.id, error=str(exc)
            )

    def _notify_status(self, order) -> None:
        if not self.notifier:
            return
        try:
            self.notifier.notify(
                order.user_id,
                _("Order update"),
                _("Your order #%(id)s is now %(status)s")
                % {"id": order.id, "status": OrderStatus(order.status).label},
                kind=NotificationKind.ORDER,
            )
        except DatabaseError as exc:
            self.logger.warning(
                "Order notification failed", order_id=order.id, error=str(exc)
            )
