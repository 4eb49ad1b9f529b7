from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from apps.common.i18n import NOTIFICATION_NOT_FOUND
from .container import build_notification_service
from .serializers import (
    MarkAllReadSerializer,
    NotificationFeedSerializer,
    NotificationSerializer,
)

logger = get_logger(__name__).bind(component="notifications", layer="view")


@extend_schema(tags=["Notifications"])
class NotificationFeedView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_notification_service()
    log = logger.bind(view="NotificationFeedView")

    @extend_schema(
        summary="Latest notifications with unread count",
        responses={200: NotificationFeedSerializer},
    )
    def get(self, request):
        feed = self.service.feed(request.user.id)
        return Response(NotificationFeedSerializer(feed).data)


@extend_schema(tags=["Notifications"])
class NotificationReadView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_notification_service()
    log = logger.bind(view="NotificationReadView")

    @extend_schema(
        summary="Mark a notification as read",
        parameters=[OpenApiParameter("notification_id", int, OpenApiParameter.PATH)],
        request=None,
        responses={
            200: NotificationSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, notification_id: int):
        dto = self.service.mark_read(request.user.id, notification_id)
        if not dto:
            return error_response(
                "NOT_FOUND", NOTIFICATION_NOT_FOUND, {"id": str(notification_id)}
            )
        return Response(NotificationSerializer(dto).data)


@extend_schema(tags=["Notifications"])
class NotificationReadAllView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_notification_service()
    log = logger.bind(view="NotificationReadAllView")

    @extend_schema(
        summary="Mark every notification as read",
        request=None,
        responses={200: MarkAllReadSerializer},
    )
    def post(self, request):
        updated = self.service.mark_all_read(request.user.id)
        return Response({"updated": updated})
