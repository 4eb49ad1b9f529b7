from django.urls import path

from .views import NotificationFeedView, NotificationReadAllView, NotificationReadView

urlpatterns = [
    path("", NotificationFeedView.as_view(), name="api-notifications"),
    path("read-all/", NotificationReadAllView.as_view(), name="api-notifications-read-all"),
    path(
        "<int:notification_id>/read/",
        NotificationReadView.as_view(),
        name="api-notifications-read",
    ),
]
