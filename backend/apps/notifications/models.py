from django.db import models

from apps.users.models import User


class NotificationKind(models.TextChoices):
    PRODUCT_STATUS = "PRODUCT_STATUS", "Product status"
    ORDER = "ORDER", "Order"
    SYSTEM = "SYSTEM", "System"


class Notification(models.Model):
    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="notifications"
    )
    title = models.CharField(max_length=200)
    message = models.TextField()
    kind = models.CharField(
        max_length=32, choices=NotificationKind.choices, default=NotificationKind.SYSTEM
    )
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_read_idx"),
        ]

    def __str__(self):
        return f"Notification {self.id} for user {self.user_id}"
