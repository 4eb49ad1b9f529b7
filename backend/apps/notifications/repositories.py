from apps.common.repository import GenericRepository
from .models import Notification


class NotificationRepository(GenericRepository[Notification]):
    def __init__(self):
        super().__init__(Notification)

    def latest_for_user(self, user_id: int, limit: int):
        return self.model.objects.filter(user_id=user_id).order_by(
            "-created_at", "-id"
        )[:limit]

    def unread_count(self, user_id: int) -> int:
        return self.model.objects.filter(user_id=user_id, is_read=False).count()

    def mark_read(self, notification: Notification) -> Notification:
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return notification

    def mark_all_read(self, user_id: int) -> int:
        return self.model.objects.filter(user_id=user_id, is_read=False).update(
            is_read=True
        )
