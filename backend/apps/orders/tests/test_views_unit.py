import unittest
from decimal import Decimal

from rest_framework.exceptions import ValidationError

from apps.orders.dtos import OrderDTO, OrderItemDTO
from apps.orders.views import DeliveryListView, OrderDetailView, OrderListView, OrderStatusView


class DummyRequest:
    def __init__(self, user):
        self.user = user
        self.data = {}
        self.query_params = {}


def _dto(order_id=1):
    return OrderDTO(
        id=order_id,
        user_id=9,
        status="PAGO",
        channel="EXPRESS",
        subtotal=Decimal("50000"),
        shipping=Decimal("2500"),
        total=Decimal("52500"),
        items=[
            OrderItemDTO(
                product_id=4,
                product_name="Gerador 5KVA",
                quantity=1,
                price=Decimal("50000"),
                variations={},
            )
        ],
        created_at="2024-01-01T00:00:00+00:00",
    )


class StubOrderService:
    def __init__(self):
        self.calls = []
        self.error = None

    def list_orders(self, user_id):
        self.calls.append(("list", user_id))
        return [_dto(2), _dto(1)]

    def get_order(self, order_id, *, viewer_id, viewer_privileged=False):
        self.calls.append(("get", order_id, viewer_id, viewer_privileged))
        if self.error:
            return None, self.error
        return _dto(order_id), None

    def list_available_deliveries(self):
        self.calls.append(("available",))
        return [_dto(3)]

    def list_deliveries(self, courier_id):
        self.calls.append(("mine", courier_id))
        return [_dto(4)]

    def advance_status(self, order_id, target, *, actor_id, actor_is_courier=False,
                       actor_privileged=False):
        self.calls.append(("advance", order_id, target, actor_id, actor_is_courier))
        if self.error:
            return None, self.error
        return _dto(order_id), None


class OrderViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = StubOrderService()
        self.user = type(
            "User", (), {"id": 9, "is_authenticated": True, "is_privileged": False}
        )()

    def dispatch(self, view_cls, **kwargs):
        view = view_cls()
        view.service = self.service
        return view.get(DummyRequest(self.user), **kwargs)

    def test_list_returns_camel_case_orders(self):
        resp = self.dispatch(OrderListView)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([o["id"] for o in resp.data], [2, 1])
        self.assertEqual(resp.data[0]["items"][0]["productName"], "Gerador 5KVA")
        self.assertEqual(resp.data[0]["total"], "52500")

    def test_detail_forwards_viewer(self):
        resp = self.dispatch(OrderDetailView, order_id=5)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.service.calls[-1], ("get", 5, 9, False))

    def test_detail_maps_service_error(self):
        self.service.error = ("NOT_FOUND", "Order not found", {"id": "5"})
        resp = self.dispatch(OrderDetailView, order_id=5)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")


class DeliveryViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = StubOrderService()
        self.courier = type(
            "User",
            (),
            {"id": 30, "is_authenticated": True, "is_privileged": False, "is_courier": True},
        )()

    def request(self, data=None, query=None):
        request = DummyRequest(self.courier)
        request.data = data or {}
        request.query_params = query or {}
        return request

    def list_view(self):
        view = DeliveryListView()
        view.service = self.service
        return view

    def status_view(self):
        view = OrderStatusView()
        view.service = self.service
        return view

    def test_default_scope_lists_own_deliveries(self):
        resp = self.list_view().get(self.request())
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([o["id"] for o in resp.data], [4])
        self.assertEqual(self.service.calls[-1], ("mine", 30))

    def test_available_scope(self):
        resp = self.list_view().get(self.request(query={"scope": "available"}))
        self.assertEqual([o["id"] for o in resp.data], [3])
        self.assertIn("courierId", resp.data[0])

    def test_unknown_scope_is_rejected(self):
        resp = self.list_view().get(self.request(query={"scope": "all"}))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"]["code"], "VALIDATION_ERROR")

    def test_status_update_forwards_courier(self):
        resp = self.status_view().post(self.request({"status": "ATRIBUIDO"}), order_id=5)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.service.calls[-1], ("advance", 5, "ATRIBUIDO", 30, True))

    def test_status_update_maps_conflict(self):
        self.service.error = ("CONFLICT", "Not available", {"status": "PAGO"})
        resp = self.status_view().post(self.request({"status": "ENTREGUE"}), order_id=5)
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.data["error"]["code"], "CONFLICT")

    def test_unknown_status_value_is_invalid(self):
        with self.assertRaises(ValidationError):
            self.status_view().post(self.request({"status": "CANCELADO"}), order_id=5)
        self.assertEqual(self.service.calls, [])
