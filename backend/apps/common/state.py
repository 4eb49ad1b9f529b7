"""
Per-owner JSON state persistence.

Client state such as the cart, wishlist or search history is kept as a single
JSON blob under a fixed key for each owner. A ``StateStore`` is bound to one
owner and is handed explicitly to the components that need it; they load once
when built and save after every change.
"""
from __future__ import annotations

import copy
from typing import Any, Optional, Protocol

from django.db import DatabaseError

from .logger import get_logger
from .models import StoredState
from .repository import GenericRepository

logger = get_logger(__name__).bind(component="common", layer="state")


class StateRepositoryProtocol(Protocol):
    def get_payload(self, owner: str, key: str) -> Optional[Any]:
        ...

    def upsert(self, owner: str, key: str, payload: Any) -> None:
        ...

    def delete_key(self, owner: str, key: str) -> None:
        ...


class StateRepository(GenericRepository[StoredState]):
    def __init__(self):
        super().__init__(StoredState)

    def get_payload(self, owner: str, key: str) -> Optional[Any]:
        row = self.model.objects.filter(owner=owner, key=key).values("payload").first()
        return row["payload"] if row else None

    def upsert(self, owner: str, key: str, payload: Any) -> None:
        self.model.objects.update_or_create(
            owner=owner, key=key, defaults={"payload": payload}
        )

    def delete_key(self, owner: str, key: str) -> None:
        self.model.objects.filter(owner=owner, key=key).delete()


class StateStore:
    def __init__(self, owner: Any, repository: StateRepositoryProtocol):
        self.owner = str(owner)
        self.repository = repository
        self.logger = logger.bind(owner=self.owner)

    def load(self, key: str, default: Any = None) -> Any:
        payload = self.repository.get_payload(self.owner, key)
        if payload is None:
            return copy.deepcopy(default)
        return payload

    def save(self, key: str, value: Any) -> None:
        self.repository.upsert(self.owner, key, value)
        self.logger.debug("State saved", key=key)

    def delete(self, key: str) -> None:
        self.repository.delete_key(self.owner, key)
        self.logger.debug("State deleted", key=key)

    def load_best_effort(self, key: str, default: Any = None) -> Any:
        """Like ``load`` but a storage failure yields ``default`` instead of raising."""
        try:
            return self.load(key, default)
        except (DatabaseError, ValueError, TypeError) as exc:
            self.logger.warning("Failed to load state", key=key, error=str(exc))
            return copy.deepcopy(default)

    def save_best_effort(self, key: str, value: Any) -> bool:
        """Persist ``value``; failures are logged and reported as ``False``."""
        try:
            self.save(key, value)
        except (DatabaseError, ValueError, TypeError) as exc:
            self.logger.warning("Failed to persist state", key=key, error=str(exc))
            return False
        return True


def build_state_store(owner: Any) -> StateStore:
    return StateStore(owner, StateRepository())


__all__ = [
    "StateRepository",
    "StateRepositoryProtocol",
    "StateStore",
    "build_state_store",
]
