from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from apps.catalog.models import ProductStatus
from apps.common import get_logger
from apps.common.i18n import OUT_OF_STOCK, PRODUCT_NOT_FOUND
from .commands import CartItemCommand
from .dtos import CartDTO
from .protocols import CartStoreFactory, ProductRepositoryProtocol
from .store import CartStore

logger = get_logger(__name__).bind(component="carts", layer="service")

ErrorTuple = Tuple[str, Any, Optional[Dict[str, Any]]]


class CartService:
    def __init__(self, products: ProductRepositoryProtocol, store_factory: CartStoreFactory):
        self.products = products
        self.store_factory = store_factory
        self.logger = logger.bind(service="CartService")

    def _snapshot(self, cart: CartStore) -> CartDTO:
        return CartDTO(lines=cart.lines(), totals=cart.totals())

    def get_cart(self, user_id: int) -> CartDTO:
        self.logger.debug("Loading cart", user_id=user_id)
        return self._snapshot(self.store_factory(user_id))

    def add_item(
        self, user_id: int, command: CartItemCommand
    ) -> Tuple[Optional[CartDTO], Optional[ErrorTuple]]:
        product = self.products.get(id=command.product_id)
        if not product or product.status != ProductStatus.PUBLICADO:
            self.logger.info(
                "Cart add for unavailable product",
                user_id=user_id,
                product_id=command.product_id,
            )
            return None, ("NOT_FOUND", PRODUCT_NOT_FOUND, {"productId": str(command.product_id)})
        if product.stock <= 0:
            self.logger.info(
                "Cart add for product without stock",
                user_id=user_id,
                product_id=product.id,
            )
            return None, ("CONFLICT", OUT_OF_STOCK, {"productId": str(product.id)})
        cart = self.store_factory(user_id)
        cart.add_item(product, command.quantity, command.options)
        return self._snapshot(cart), None

    def set_quantity(self, user_id: int, product_id: Any, quantity: Any) -> CartDTO:
        cart = self.store_factory(user_id)
        cart.set_quantity(product_id, quantity)
        return self._snapshot(cart)

    def remove_item(self, user_id: int, product_id: Any) -> CartDTO:
        cart = self.store_factory(user_id)
        cart.remove_item(product_id)
        return self._snapshot(cart)

    def clear(self, user_id: int) -> CartDTO:
        cart = self.store_factory(user_id)
        cart.clear()
        return self._snapshot(cart)

    def contains(self, user_id: int, product_id: Any) -> bool:
        return self.store_factory(user_id).contains(product_id)
