from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from apps.common.i18n import INVALID_DELIVERY_SCOPE
from apps.users.permissions import IsCourierOrAdmin
from .container import build_order_service
from .serializers import OrderSerializer, OrderStatusUpdateSerializer

logger = get_logger(__name__).bind(component="orders", layer="view")


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderListView")

    @extend_schema(
        summary="My orders, newest first",
        responses={200: OrderSerializer(many=True)},
    )
    def get(self, request):
        orders = self.service.list_orders(request.user.id)
        self.log.debug("Orders listed", user_id=request.user.id, count=len(orders))
        return Response(OrderSerializer(orders, many=True).data)


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderDetailView")

    @extend_schema(
        summary="Get order",
        parameters=[OpenApiParameter("order_id", int, OpenApiParameter.PATH)],
        responses={
            200: OrderSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, order_id: int):
        dto, error = self.service.get_order(
            order_id,
            viewer_id=request.user.id,
            viewer_privileged=bool(getattr(request.user, "is_privileged", False)),
        )
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response(OrderSerializer(dto).data)


DELIVERY_SCOPES = ("mine", "available")


@extend_schema(tags=["Deliveries"])
class DeliveryListView(APIView):
    permission_classes = [IsAuthenticated, IsCourierOrAdmin]
    service = build_order_service()
    log = logger.bind(view="DeliveryListView")

    @extend_schema(
        summary="Courier deliveries: own active ones or orders open to claim",
        parameters=[
            OpenApiParameter("scope", str, OpenApiParameter.QUERY, enum=list(DELIVERY_SCOPES))
        ],
        responses={
            200: OrderSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        scope = request.query_params.get("scope", "mine")
        if scope not in DELIVERY_SCOPES:
            return error_response(
                "VALIDATION_ERROR",
                INVALID_DELIVERY_SCOPE,
                {"scope": scope, "allowed": list(DELIVERY_SCOPES)},
            )
        if scope == "available":
            orders = self.service.list_available_deliveries()
        else:
            orders = self.service.list_deliveries(request.user.id)
        self.log.debug("Deliveries listed", user_id=request.user.id, scope=scope, count=len(orders))
        return Response(OrderSerializer(orders, many=True).data)


@extend_schema(tags=["Deliveries"])
class OrderStatusView(APIView):
    permission_classes = [IsAuthenticated, IsCourierOrAdmin]
    service = build_order_service()
    log = logger.bind(view="OrderStatusView")

    @extend_schema(
        summary="Advance an order one delivery step",
        parameters=[OpenApiParameter("order_id", int, OpenApiParameter.PATH)],
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, order_id: int):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto, error = self.service.advance_status(
            order_id,
            serializer.validated_data["status"],
            actor_id=request.user.id,
            actor_is_courier=bool(getattr(request.user, "is_courier", False)),
            actor_privileged=bool(getattr(request.user, "is_privileged", False)),
        )
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response(OrderSerializer(dto).data)
