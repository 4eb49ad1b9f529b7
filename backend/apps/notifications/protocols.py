from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Notification


class NotificationRepositoryProtocol(Protocol):
    def create(self, **data) -> "Notification":
        ...

    def latest_for_user(self, user_id: int, limit: int) -> Iterable["Notification"]:
        ...

    def unread_count(self, user_id: int) -> int:
        ...

    def get(self, **filters) -> Optional["Notification"]:
        ...

    def mark_read(self, notification: "Notification") -> "Notification":
        ...

    def mark_all_read(self, user_id: int) -> int:
        ...


class NotifierProtocol(Protocol):
    """What other apps need to post a message into a user's feed."""

    def notify(self, user_id: int, title: str, message: str, kind: str = ...):
        ...
