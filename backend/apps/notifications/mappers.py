from typing import Iterable, List

from .dtos import NotificationDTO
from .models import Notification


class NotificationMapper:
    @staticmethod
    def to_dto(notification: Notification) -> NotificationDTO:
        created = getattr(notification, "created_at", None)
        return NotificationDTO(
            id=notification.id,
            title=notification.title,
            message=notification.message,
            kind=str(notification.kind),
            is_read=bool(notification.is_read),
            created_at=created.isoformat() if created else None,
        )

    @staticmethod
    def many_to_dto(notifications: Iterable[Notification]) -> List[NotificationDTO]:
        return [NotificationMapper.to_dto(n) for n in notifications]
