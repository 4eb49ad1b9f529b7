from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_screen_memory, build_search_history, build_wishlist
from .serializers import (
    ScreenSerializer,
    SearchHistorySerializer,
    SearchHistoryWriteSerializer,
    WishlistContainsSerializer,
    WishlistSerializer,
    WishlistToggleResultSerializer,
    WishlistToggleSerializer,
)

logger = get_logger(__name__).bind(component="preferences", layer="view")


@extend_schema(tags=["Preferences"])
class WishlistView(APIView):
    permission_classes = [IsAuthenticated]
    build = staticmethod(build_wishlist)
    log = logger.bind(view="WishlistView")

    @extend_schema(summary="Wishlisted product ids", responses={200: WishlistSerializer})
    def get(self, request):
        return Response({"items": self.build(request.user.id).items()})

    @extend_schema(
        summary="Toggle a product in the wishlist",
        request=WishlistToggleSerializer,
        responses={
            200: WishlistToggleResultSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = WishlistToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product_id = serializer.validated_data["productId"]
        wishlist = self.build(request.user.id)
        wishlisted = wishlist.toggle(product_id)
        return Response(
            {"productId": product_id, "wishlisted": wishlisted, "items": wishlist.items()}
        )


@extend_schema(tags=["Preferences"])
class WishlistItemView(APIView):
    permission_classes = [IsAuthenticated]
    build = staticmethod(build_wishlist)

    @extend_schema(
        summary="Is the product wishlisted",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        responses={200: WishlistContainsSerializer},
    )
    def get(self, request, product_id: str):
        return Response({"wishlisted": self.build(request.user.id).contains(product_id)})


@extend_schema(tags=["Preferences"])
class SearchHistoryView(APIView):
    permission_classes = [IsAuthenticated]
    build = staticmethod(build_search_history)
    log = logger.bind(view="SearchHistoryView")

    @extend_schema(summary="Recent searches, newest first", responses={200: SearchHistorySerializer})
    def get(self, request):
        return Response({"items": self.build(request.user.id).entries()})

    @extend_schema(
        summary="Record a search",
        request=SearchHistoryWriteSerializer,
        responses={201: SearchHistorySerializer},
    )
    def post(self, request):
        serializer = SearchHistoryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entries = self.build(request.user.id).record(serializer.validated_data["query"])
        return Response({"items": entries}, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Clear search history", responses={204: None})
    def delete(self, request):
        self.build(request.user.id).clear()
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Preferences"])
class ScreenView(APIView):
    permission_classes = [IsAuthenticated]
    build = staticmethod(build_screen_memory)
    log = logger.bind(view="ScreenView")

    @extend_schema(summary="Screen to restore on next visit", responses={200: ScreenSerializer})
    def get(self, request):
        return Response({"screen": self.build(request.user.id).current()})

    @extend_schema(
        summary="Remember the current screen",
        request=ScreenSerializer,
        responses={
            200: ScreenSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request):
        screen = str(request.data.get("screen", "")).strip()
        current = self.build(request.user.id).remember(screen)
        self.log.debug("Screen remembered", screen=screen)
        return Response({"screen": current})
