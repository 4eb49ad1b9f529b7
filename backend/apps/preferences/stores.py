"""
Per-user preference stores.

Each store wraps one key of a ``StateStore``; reads and writes are best
effort, so a storage outage degrades to defaults instead of failing requests.
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from apps.common import get_logger
from apps.common.state import StateStore
from .errors import InvalidScreenError

logger = get_logger(__name__).bind(component="preferences", layer="store")

WISHLIST_KEY = "ango_wishlist"
SEARCH_HISTORY_KEY = "apm_search_history"
SCREEN_KEY = "ango_current_screen"

DEFAULT_SEARCH_HISTORY = ("Gerador 5kva", "Cerveja Cuca grade", "Smartphone barato")

AUTH_SCREEN = "auth"
HOME_SCREEN = "home"
KNOWN_SCREENS = (
    AUTH_SCREEN,
    HOME_SCREEN,
    "categories",
    "cart",
    "profile",
    "search",
    "admin",
    "submit_product",
    "product_details",
    "chat_room",
)


class Wishlist:
    def __init__(self, store: StateStore):
        self.store = store
        self.logger = logger.bind(store="Wishlist", owner=store.owner)

    def items(self) -> List[str]:
        raw = self.store.load_best_effort(WISHLIST_KEY, [])
        if not isinstance(raw, list):
            return []
        return [str(item) for item in raw]

    def contains(self, product_id: Any) -> bool:
        return str(product_id) in self.items()

    def toggle(self, product_id: Any) -> bool:
        """Add or remove ``product_id``; returns whether it is now wishlisted."""
        pid = str(product_id)
        items = self.items()
        if pid in items:
            items = [i for i in items if i != pid]
            wishlisted = False
        else:
            items.append(pid)
            wishlisted = True
        self.store.save_best_effort(WISHLIST_KEY, items)
        self.logger.info("Wishlist toggled", product_id=pid, wishlisted=wishlisted)
        return wishlisted


class SearchHistory:
    def __init__(self, store: StateStore, limit: int = 10):
        self.store = store
        self.limit = limit
        self.logger = logger.bind(store="SearchHistory", owner=store.owner)

    def entries(self) -> List[str]:
        raw = self.store.load_best_effort(SEARCH_HISTORY_KEY, None)
        if raw is None:
            return list(DEFAULT_SEARCH_HISTORY)
        if not isinstance(raw, list):
            return []
        return [str(entry) for entry in raw][: self.limit]

    def record(self, query: str) -> List[str]:
        """Move ``query`` to the front, dropping case-insensitive duplicates."""
        text = (query or "").strip()
        if not text:
            return self.entries()
        lowered = text.lower()
        entries = [text] + [e for e in self.entries() if e.lower() != lowered]
        entries = entries[: self.limit]
        self.store.save_best_effort(SEARCH_HISTORY_KEY, entries)
        self.logger.debug("Search recorded", size=len(entries))
        return entries

    def clear(self) -> None:
        self.store.save_best_effort(SEARCH_HISTORY_KEY, [])
        self.logger.info("Search history cleared")


class ScreenMemory:
    def __init__(self, store: StateStore, screens: Sequence[str] = KNOWN_SCREENS):
        self.store = store
        self.screens = tuple(screens)
        self.logger = logger.bind(store="ScreenMemory", owner=store.owner)

    def current(self) -> str:
        saved: Optional[str] = self.store.load_best_effort(SCREEN_KEY, None)
        if saved in self.screens and saved != AUTH_SCREEN:
            return saved
        return HOME_SCREEN

    def remember(self, screen: str) -> str:
        if screen not in self.screens:
            raise InvalidScreenError(details={"screen": screen, "allowed": list(self.screens)})
        # The sign-in screen is never restored on the next visit.
        if screen != AUTH_SCREEN:
            self.store.save_best_effort(SCREEN_KEY, screen)
        return self.current()
