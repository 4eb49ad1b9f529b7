from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .commands import SearchFilters
    from .models import Product


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...

    def create(self, **data) -> "Product":
        ...

    def update(self, obj: "Product", **data) -> "Product":
        ...

    def list_published(self, category: Optional[str] = None) -> Iterable["Product"]:
        ...

    def list_pending(self) -> Iterable["Product"]:
        ...

    def search(self, filters: "SearchFilters") -> Iterable["Product"]:
        ...

    def names_matching(self, text: str, limit: int) -> List[str]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...


class SuggestionProviderProtocol(Protocol):
    """Optional text-completion collaborator; advisory only."""

    def suggest(self, query: str, limit: int) -> List[str]:
        ...
