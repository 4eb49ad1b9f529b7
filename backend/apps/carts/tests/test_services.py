import unittest
from decimal import Decimal
from types import SimpleNamespace

from apps.carts.commands import CartItemCommand
from apps.carts.services import CartService
from apps.carts.store import CartStore
from apps.common.state import StateStore
from apps.common.tests.test_state import InMemoryStateRepository


class FakeProductRepository:
    def __init__(self, *products):
        self.products = {p.id: p for p in products}

    def get(self, **filters):
        return self.products.get(filters.get("id"))


def make_product(product_id, price="50000", status="PUBLICADO", stock=5):
    return SimpleNamespace(
        id=product_id,
        name=f"Produto {product_id}",
        price=Decimal(price),
        image="",
        status=status,
        stock=stock,
    )


class CartServiceTests(unittest.TestCase):
    def setUp(self):
        self.repo = InMemoryStateRepository()
        self.products = FakeProductRepository(
            make_product(1),
            make_product(2, price="120000"),
            make_product(3, status="PENDENTE"),
            make_product(4, stock=0),
        )
        self.service = CartService(
            self.products, store_factory=lambda user_id: CartStore(StateStore(user_id, self.repo))
        )

    def test_add_item_returns_snapshot_with_totals(self):
        dto, error = self.service.add_item(7, CartItemCommand(product_id=1, quantity=1))
        self.assertIsNone(error)
        self.assertEqual(dto.lines[0].product_id, "1")
        self.assertEqual(dto.totals.total, Decimal("52500"))

    def test_cart_is_persisted_between_requests(self):
        self.service.add_item(7, CartItemCommand(product_id=2))
        self.assertTrue(self.service.contains(7, 2))
        self.assertEqual(self.service.get_cart(7).totals.shipping, Decimal("0"))
        self.assertFalse(self.service.contains(8, 2))

    def test_missing_or_unpublished_product_is_not_found(self):
        for pid in (3, 99):
            with self.subTest(product_id=pid):
                dto, error = self.service.add_item(7, CartItemCommand(product_id=pid))
                self.assertIsNone(dto)
                self.assertEqual(error[0], "NOT_FOUND")
        self.assertEqual(self.service.get_cart(7).lines, [])

    def test_out_of_stock_product_conflicts(self):
        dto, error = self.service.add_item(7, CartItemCommand(product_id=4))
        self.assertIsNone(dto)
        self.assertEqual(error[0], "CONFLICT")

    def test_set_quantity_and_remove(self):
        self.service.add_item(7, CartItemCommand(product_id=1, quantity=2))
        dto = self.service.set_quantity(7, "1", 3)
        self.assertEqual(dto.totals.count, 3)
        dto = self.service.set_quantity(7, "1", 0)
        self.assertEqual(dto.lines, [])

    def test_clear_empties_cart(self):
        self.service.add_item(7, CartItemCommand(product_id=1))
        self.service.add_item(7, CartItemCommand(product_id=2))
        dto = self.service.clear(7)
        self.assertEqual(dto.totals.count, 0)
        self.assertEqual(self.service.get_cart(7).lines, [])

    def test_command_from_validated_data(self):
        command = CartItemCommand.from_raw(
            {"product_id": "5", "quantity": 2, "options": {"Cor": "Preto"}}
        )
        self.assertEqual(command, CartItemCommand(product_id=5, quantity=2, options={"Cor": "Preto"}))
