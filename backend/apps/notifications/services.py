from __future__ import annotations

from typing import Optional

from django.conf import settings

from apps.common import get_logger
from .dtos import NotificationDTO, NotificationFeedDTO
from .mappers import NotificationMapper
from .models import NotificationKind
from .protocols import NotificationRepositoryProtocol

logger = get_logger(__name__).bind(component="notifications", layer="service")


class NotificationService:
    def __init__(
        self,
        notifications: NotificationRepositoryProtocol,
        page_size: Optional[int] = None,
    ):
        self.notifications = notifications
        self.page_size = page_size or getattr(settings, "NOTIFICATIONS_PAGE_SIZE", 20)
        self.logger = logger.bind(service="NotificationService")

    def notify(
        self,
        user_id: int,
        title: str,
        message: str,
        kind: str = NotificationKind.SYSTEM,
    ) -> NotificationDTO:
        notification = self.notifications.create(
            user_id=user_id, title=str(title), message=str(message), kind=kind
        )
        self.logger.info(
            "Notification created",
            user_id=user_id,
            notification_id=notification.id,
            kind=kind,
        )
        return NotificationMapper.to_dto(notification)

    def feed(self, user_id: int) -> NotificationFeedDTO:
        self.logger.debug("Loading notification feed", user_id=user_id, limit=self.page_size)
        items = NotificationMapper.many_to_dto(
            self.notifications.latest_for_user(user_id, self.page_size)
        )
        return NotificationFeedDTO(
            items=items, unread_count=self.notifications.unread_count(user_id)
        )

    def mark_read(self, user_id: int, notification_id: int) -> Optional[NotificationDTO]:
        notification = self.notifications.get(id=notification_id, user_id=user_id)
        if not notification:
            self.logger.info(
                "Notification not found",
                user_id=user_id,
                notification_id=notification_id,
            )
            return None
        notification = self.notifications.mark_read(notification)
        self.logger.info("Notification marked read", notification_id=notification_id)
        return NotificationMapper.to_dto(notification)

    def mark_all_read(self, user_id: int) -> int:
        updated = self.notifications.mark_all_read(user_id)
        self.logger.info("Notifications marked read", user_id=user_id, updated=updated)
        return updated
