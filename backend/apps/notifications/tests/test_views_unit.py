import unittest

from rest_framework import status

from apps.notifications.dtos import NotificationDTO, NotificationFeedDTO
from apps.notifications.views import (
    NotificationFeedView,
    NotificationReadAllView,
    NotificationReadView,
)


class DummyRequest:
    def __init__(self, user, method="GET"):
        self.user = user
        self.method = method
        self.data = {}
        self.query_params = {}


def _dto(notification_id=1, is_read=False):
    return NotificationDTO(
        id=notification_id,
        title="Encomenda confirmada",
        message="Pagamento recebido",
        kind="ORDER",
        is_read=is_read,
        created_at="2024-01-01T00:00:00+00:00",
    )


class StubNotificationService:
    def __init__(self):
        self.read_result = _dto(is_read=True)
        self.calls = []

    def feed(self, user_id):
        self.calls.append(("feed", user_id))
        return NotificationFeedDTO(items=[_dto()], unread_count=1)

    def mark_read(self, user_id, notification_id):
        self.calls.append(("mark_read", user_id, notification_id))
        return self.read_result

    def mark_all_read(self, user_id):
        self.calls.append(("mark_all_read", user_id))
        return 3


class NotificationViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = StubNotificationService()
        self.user = type("User", (), {"id": 9, "is_authenticated": True})()

    def dispatch(self, view_cls, method="get", **kwargs):
        view = view_cls()
        view.service = self.service
        return getattr(view, method)(DummyRequest(self.user, method.upper()), **kwargs)

    def test_feed_serializes_camel_case(self):
        response = self.dispatch(NotificationFeedView)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["unreadCount"], 1)
        self.assertFalse(response.data["items"][0]["isRead"])

    def test_mark_read_missing_is_404(self):
        self.service.read_result = None
        response = self.dispatch(NotificationReadView, "post", notification_id=5)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.service.calls[-1], ("mark_read", 9, 5))

    def test_mark_read_returns_notification(self):
        response = self.dispatch(NotificationReadView, "post", notification_id=1)
        self.assertTrue(response.data["isRead"])

    def test_mark_all_read_reports_count(self):
        response = self.dispatch(NotificationReadAllView, "post")
        self.assertEqual(response.data, {"updated": 3})
