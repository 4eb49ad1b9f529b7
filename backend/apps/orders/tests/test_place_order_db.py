from decimal import Decimal

from django.db import DatabaseError
from django.test import TestCase
from rest_framework.test import APIClient

from apps.catalog.models import Product, ProductStatus
from apps.notifications.models import Notification
from apps.orders.commands import OrderLineCommand, PlaceOrderCommand
from apps.orders.container import build_order_service
from apps.orders.models import Order, OrderItem
from apps.orders.repositories import OrderItemRepository
from apps.users.models import User, UserRole


class FailingItemRepository(OrderItemRepository):
    def bulk_create(self, objs):
        raise DatabaseError("simulated failure")


class PlaceOrderTransactionTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            username="buyer", email="buyer@example.com", password="secret123"
        )
        cls.product = Product.objects.create(
            name="Smart TV 55",
            price=Decimal("320000"),
            category="Eletrónicos",
            status=ProductStatus.PUBLICADO,
            stock=3,
        )

    def _command(self, attempt_id="attempt-db-1"):
        return PlaceOrderCommand(
            user_id=self.user.id,
            attempt_id=attempt_id,
            channel="TRANSFER",
            lines=[
                OrderLineCommand(
                    product_id=self.product.id,
                    name=self.product.name,
                    unit_price=self.product.price,
                    quantity=1,
                )
            ],
            subtotal=Decimal("320000"),
            shipping=Decimal("0"),
            total=Decimal("320000"),
            proof_reference="proofs/receipt.pdf",
        )

    def test_order_and_items_are_written_together(self):
        dto = build_order_service().place_order(self._command())
        order = Order.objects.get(id=dto.id)
        self.assertEqual(order.status, "PAGO")
        self.assertEqual(order.items.count(), 1)
        self.assertEqual(order.items.first().product_id, self.product.id)
        self.assertTrue(
            Notification.objects.filter(user=self.user, kind="ORDER").exists()
        )

    def test_failed_item_write_rolls_back_order(self):
        service = build_order_service()
        service.items = FailingItemRepository()
        with self.assertRaises(DatabaseError):
            service.place_order(self._command("attempt-db-2"))
        self.assertFalse(Order.objects.filter(attempt_id="attempt-db-2").exists())
        self.assertEqual(OrderItem.objects.count(), 0)

    def test_order_list_endpoint_requires_authentication(self):
        response = self.client.get("/api/orders/")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["code"], "UNAUTHORIZED")

    def test_courier_claims_and_delivers_through_api(self):
        order_id = build_order_service().place_order(self._command("attempt-db-3")).id
        courier = User.objects.create_user(
            username="estafeta", email="estafeta@example.com", password="secret123",
            role=UserRole.COURIER,
        )
        client = APIClient()
        client.force_authenticate(user=courier)
        for target in ("ATRIBUIDO", "EM_POSSE", "EM_TRANSITO", "ENTREGUE"):
            response = client.post(
                f"/api/orders/{order_id}/status/", {"status": target}, format="json"
            )
            self.assertEqual(response.status_code, 200, target)
        order = Order.objects.get(id=order_id)
        self.assertEqual(order.courier_id, courier.id)
        self.assertIsNotNone(order.delivered_at)
        self.assertEqual(
            Notification.objects.filter(user=self.user, kind="ORDER").count(), 5
        )

    def test_buyer_cannot_advance_delivery(self):
        order_id = build_order_service().place_order(self._command("attempt-db-4")).id
        client = APIClient()
        client.force_authenticate(user=self.user)
        response = client.post(
            f"/api/orders/{order_id}/status/", {"status": "ATRIBUIDO"}, format="json"
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(Order.objects.get(id=order_id).status, "PAGO")
