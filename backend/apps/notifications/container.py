from __future__ import annotations

from .repositories import NotificationRepository
from .services import NotificationService


def build_notification_service() -> NotificationService:
    return NotificationService(notifications=NotificationRepository())
