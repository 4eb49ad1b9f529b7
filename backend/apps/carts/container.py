from __future__ import annotations

from typing import Any

from django.conf import settings

from apps.catalog.repositories import ProductRepository
from apps.common.state import build_state_store
from .services import CartService
from .store import CartStore


def build_cart_store(user_id: Any) -> CartStore:
    return CartStore(
        build_state_store(user_id),
        threshold=settings.CART_FREE_SHIPPING_THRESHOLD,
        flat_fee=settings.CART_SHIPPING_FLAT_FEE,
        merge_policy=settings.CART_OPTION_MERGE_POLICY,
    )


def build_cart_service() -> CartService:
    return CartService(products=ProductRepository(), store_factory=build_cart_store)
