import unittest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import Mock, patch

from rest_framework.test import APIRequestFactory, force_authenticate

from apps.carts.dtos import CartDTO, CartLine, CartTotals
from apps.carts.errors import InvalidQuantityError
from apps.carts.views import CartItemListView, CartItemView, CartView


def make_user(user_id=7):
    return SimpleNamespace(id=user_id, pk=user_id, is_authenticated=True, is_privileged=False)


def make_cart_dto():
    line = CartLine(
        product_id="1",
        name="Gerador 5KVA",
        unit_price=Decimal("50000"),
        quantity=1,
        image="gerador.jpg",
        options={"Potência": "5KVA"},
    )
    totals = CartTotals(
        count=1, subtotal=Decimal("50000"), shipping=Decimal("2500"), total=Decimal("52500")
    )
    return CartDTO(lines=[line], totals=totals)


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = make_user()

    def call(self, view_cls, method, path, data=None, **kwargs):
        request = getattr(self.factory, method)(path, data=data, format="json")
        force_authenticate(request, user=self.user)
        return view_cls.as_view()(request, **kwargs)

    def test_get_cart_serializes_lines_and_totals(self):
        service = Mock()
        service.get_cart.return_value = make_cart_dto()
        with patch.object(CartView, "service", service):
            resp = self.call(CartView, "get", "/api/cart/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["totals"]["total"], "52500")
        self.assertEqual(resp.data["totals"]["shipping"], "2500")
        line = resp.data["lines"][0]
        self.assertEqual(line["productId"], "1")
        self.assertEqual(line["lineTotal"], "50000")
        self.assertEqual(line["options"], {"Potência": "5KVA"})
        service.get_cart.assert_called_once_with(7)

    def test_unauthenticated_request_is_rejected(self):
        request = self.factory.get("/api/cart/")
        resp = CartView.as_view()(request)
        self.assertEqual(resp.status_code, 401)

    def test_add_item_returns_201(self):
        service = Mock()
        service.add_item.return_value = (make_cart_dto(), None)
        with patch.object(CartItemListView, "service", service):
            resp = self.call(
                CartItemListView,
                "post",
                "/api/cart/items/",
                {"productId": 1, "quantity": 2, "options": {"Potência": "5KVA"}},
            )
        self.assertEqual(resp.status_code, 201)
        user_id, command = service.add_item.call_args[0]
        self.assertEqual((user_id, command.product_id, command.quantity), (7, 1, 2))
        self.assertEqual(command.options, {"Potência": "5KVA"})

    def test_add_item_missing_product_id_is_validation_error(self):
        service = Mock()
        with patch.object(CartItemListView, "service", service):
            resp = self.call(CartItemListView, "post", "/api/cart/items/", {"quantity": 1})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("productId", resp.data["error"]["details"])
        service.add_item.assert_not_called()

    def test_add_item_invalid_quantity_maps_to_400(self):
        service = Mock()
        service.add_item.side_effect = InvalidQuantityError(details={"quantity": "0"})
        with patch.object(CartItemListView, "service", service):
            resp = self.call(
                CartItemListView, "post", "/api/cart/items/", {"productId": 1, "quantity": 0}
            )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"]["code"], "VALIDATION_ERROR")

    def test_add_item_not_found(self):
        service = Mock()
        service.add_item.return_value = (None, ("NOT_FOUND", "Product not found", {"productId": "9"}))
        with patch.object(CartItemListView, "service", service):
            resp = self.call(CartItemListView, "post", "/api/cart/items/", {"productId": 9})
        self.assertEqual(resp.status_code, 404)

    def test_patch_quantity(self):
        service = Mock()
        service.set_quantity.return_value = make_cart_dto()
        with patch.object(CartItemView, "service", service):
            resp = self.call(
                CartItemView, "patch", "/api/cart/items/1/", {"quantity": 0}, product_id="1"
            )
        self.assertEqual(resp.status_code, 200)
        service.set_quantity.assert_called_once_with(7, "1", 0)

    def test_membership(self):
        service = Mock()
        service.contains.return_value = True
        with patch.object(CartItemView, "service", service):
            resp = self.call(CartItemView, "get", "/api/cart/items/1/", product_id="1")
        self.assertEqual(resp.data, {"productId": "1", "inCart": True})

    def test_delete_item_and_clear(self):
        service = Mock()
        service.remove_item.return_value = make_cart_dto()
        service.clear.return_value = CartDTO(
            lines=[], totals=CartTotals(0, Decimal("0"), Decimal("0"), Decimal("0"))
        )
        with patch.object(CartItemView, "service", service):
            resp = self.call(CartItemView, "delete", "/api/cart/items/1/", product_id="1")
        self.assertEqual(resp.status_code, 200)
        service.remove_item.assert_called_once_with(7, "1")
        with patch.object(CartView, "service", service):
            resp = self.call(CartView, "delete", "/api/cart/")
        self.assertEqual(resp.data["totals"]["count"], 0)
