from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.catalog.models import Product
    from .store import CartStore


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


CartStoreFactory = Callable[[Any], "CartStore"]
