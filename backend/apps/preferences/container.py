from __future__ import annotations

from typing import Any

from django.conf import settings

from apps.common.state import build_state_store
from .stores import ScreenMemory, SearchHistory, Wishlist


def build_wishlist(user_id: Any) -> Wishlist:
    return Wishlist(build_state_store(user_id))


def build_search_history(user_id: Any) -> SearchHistory:
    return SearchHistory(
        build_state_store(user_id), limit=getattr(settings, "SEARCH_HISTORY_LIMIT", 10)
    )


def build_screen_memory(user_id: Any) -> ScreenMemory:
    return ScreenMemory(build_state_store(user_id))
