from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .commands import CartItemCommand
from .container import build_cart_service
from .serializers import (
    CartItemAddSerializer,
    CartMembershipSerializer,
    CartQuantitySerializer,
    CartSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

PRODUCT_PATH_PARAMETER = OpenApiParameter("product_id", str, OpenApiParameter.PATH)


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(summary="Current cart with totals", responses={200: CartSerializer})
    def get(self, request):
        return Response(CartSerializer(self.service.get_cart(request.user.id)).data)

    @extend_schema(summary="Empty the cart", responses={200: CartSerializer})
    def delete(self, request):
        dto = self.service.clear(request.user.id)
        self.log.info("Cart cleared via API", user_id=request.user.id)
        return Response(CartSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        summary="Add a product to the cart",
        description=(
            "Adding a product already in the cart increments its quantity. "
            "Options are merged according to CART_OPTION_MERGE_POLICY."
        ),
        request=CartItemAddSerializer,
        responses={
            201: CartSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CartItemAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = CartItemCommand.from_raw(serializer.validated_data)
        dto, error = self.service.add_item(request.user.id, command)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response(CartSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Cart"])
class CartItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemView")

    @extend_schema(
        summary="Is the product in the cart",
        parameters=[PRODUCT_PATH_PARAMETER],
        responses={200: CartMembershipSerializer},
    )
    def get(self, request, product_id: str):
        in_cart = self.service.contains(request.user.id, product_id)
        return Response({"productId": str(product_id), "inCart": in_cart})

    @extend_schema(
        summary="Set line quantity",
        description="A quantity of zero or less removes the line.",
        parameters=[PRODUCT_PATH_PARAMETER],
        request=CartQuantitySerializer,
        responses={
            200: CartSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, product_id: str):
        serializer = CartQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.set_quantity(
            request.user.id, product_id, serializer.validated_data["quantity"]
        )
        return Response(CartSerializer(dto).data)

    @extend_schema(
        summary="Remove a product from the cart",
        parameters=[PRODUCT_PATH_PARAMETER],
        responses={200: CartSerializer},
    )
    def delete(self, request, product_id: str):
        dto = self.service.remove_item(request.user.id, product_id)
        return Response(CartSerializer(dto).data)
