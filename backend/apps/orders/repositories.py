from apps.common.repository import GenericRepository
from .models import AWAITING_COURIER, Order, OrderItem, OrderStatus


class OrderRepository(GenericRepository[Order]):
    def __init__(self):
        super().__init__(Order)

    def get_with_items(self, order_id: int):
        return (
            self.model.objects.prefetch_related("items")
            .filter(id=order_id)
            .first()
        )

    def list_for_user(self, user_id: int):
        return (
            self.model.objects.prefetch_related("items")
            .filter(user_id=user_id)
            .order_by("-created_at", "-id")
        )

    def get_for_update(self, order_id: int):
        return self.model.objects.select_for_update().filter(id=order_id).first()

    def list_available_for_couriers(self):
        return (
            self.model.objects.prefetch_related("items")
            .filter(status__in=AWAITING_COURIER, courier__isnull=True)
            .order_by("-created_at", "-id")
        )

    def list_deliveries(self, courier_id: int):
        return (
            self.model.objects.prefetch_related("items")
            .filter(courier_id=courier_id)
            .exclude(status=OrderStatus.ENTREGUE)
            .order_by("-created_at", "-id")
        )


class OrderItemRepository(GenericRepository[OrderItem]):
    def __init__(self):
        super().__init__(OrderItem)
