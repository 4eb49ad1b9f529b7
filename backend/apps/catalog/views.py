from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, paginated_response
from apps.api.utils import error_response
from apps.common import get_logger
from apps.common.i18n import PRODUCT_NOT_FOUND
from apps.preferences.container import build_search_history
from apps.users.permissions import IsMarketplaceAdmin, IsSellerOrAdmin
from .commands import SearchFilters
from .container import (
    build_category_service,
    build_product_service,
    build_suggestion_service,
)
from .pagination import ProductListPagination
from .serializers import (
    CategorySerializer,
    ProductReadSerializer,
    ProductReviewReadSerializer,
    ProductReviewSerializer,
    ProductSubmitSerializer,
    SuggestionsSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")

SEARCH_PARAMETERS = [
    OpenApiParameter("q", str, description="Text matched against name, category and description"),
    OpenApiParameter("category", str),
    OpenApiParameter("minPrice", float),
    OpenApiParameter("maxPrice", float),
    OpenApiParameter("isInternational", str, description="all | true | false"),
    OpenApiParameter("minRating", float),
    OpenApiParameter("onlyFreeShipping", bool),
]


def _viewer(request):
    user = getattr(request, "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return None, False
    return user.id, bool(getattr(user, "is_privileged", False))


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List published products",
        description="Supports pagination via ?page and ?limit. Cached results may be served.",
        parameters=[OpenApiParameter("category", str, description="Filter by category name")],
        responses={200: paginated_response(ProductReadSerializer)},
    )
    def get(self, request):
        category = request.query_params.get("category")
        self.log.debug("Handling product list request", category=category)
        return self.service.list_products_paginated(
            request,
            category=category,
            paginator_class=ProductListPagination,
            serializer_class=ProductReadSerializer,
            view=self,
        )


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: int):
        viewer_id, privileged = _viewer(request)
        dto = self.service.get_product(
            product_id, viewer_id=viewer_id, viewer_privileged=privileged
        )
        if not dto:
            return error_response("NOT_FOUND", PRODUCT_NOT_FOUND, {"id": str(product_id)})
        return Response(ProductReadSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class ProductSearchView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductSearchView")

    @extend_schema(
        summary="Search published products",
        description="Signed-in users have the query recorded in their search history.",
        parameters=SEARCH_PARAMETERS,
        responses={200: ProductReadSerializer(many=True)},
    )
    def get(self, request):
        filters = SearchFilters.from_raw(request.query_params)
        results = self.service.search(filters)
        viewer_id, _ = _viewer(request)
        if viewer_id is not None and filters.has_text:
            build_search_history(viewer_id).record(filters.query)
        self.log.debug("Search served", query=filters.query, results=len(results))
        return Response(ProductReadSerializer(results, many=True).data)


@extend_schema(tags=["Catalog"])
class SuggestionsView(APIView):
    permission_classes = [AllowAny]
    service = build_suggestion_service()
    log = logger.bind(view="SuggestionsView")

    @extend_schema(
        summary="Search suggestions",
        parameters=[OpenApiParameter("q", str, required=True)],
        responses={200: SuggestionsSerializer},
    )
    def get(self, request):
        query = request.query_params.get("q", "")
        viewer_id, _ = _viewer(request)
        history = build_search_history(viewer_id).entries() if viewer_id is not None else []
        dto = self.service.suggest(query, history)
        return Response(SuggestionsSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()

    @extend_schema(summary="List categories", responses={200: CategorySerializer(many=True)})
    def get(self, request):
        return Response(CategorySerializer(self.service.list_categories(), many=True).data)


@extend_schema(tags=["Catalog"])
class CategoryDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()

    @extend_schema(
        summary="Get category by slug",
        responses={
            200: CategorySerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, slug: str):
        dto = self.service.get_category(slug)
        if not dto:
            return error_response("NOT_FOUND", "Category not found", {"slug": slug})
        return Response(CategorySerializer(dto).data)


@extend_schema(tags=["Catalog", "Sellers"])
class ProductSubmitView(APIView):
    permission_classes = [IsAuthenticated, IsSellerOrAdmin]
    service = build_product_service()
    log = logger.bind(view="ProductSubmitView")

    @extend_schema(
        summary="Submit a product for review",
        request=ProductSubmitSerializer,
        responses={
            201: ProductReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = ProductSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.submit_product(request.user.id, serializer.validated_data)
        self.log.info("Product submitted via API", product_id=dto.id, seller_id=request.user.id)
        return Response(ProductReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Catalog", "Admin"])
class PendingProductListView(APIView):
    permission_classes = [IsAuthenticated, IsMarketplaceAdmin]
    service = build_product_service()

    @extend_schema(
        summary="Products awaiting review",
        responses={200: ProductReviewReadSerializer(many=True)},
    )
    def get(self, request):
        return Response(
            ProductReviewReadSerializer(self.service.list_pending(), many=True).data
        )


@extend_schema(tags=["Catalog", "Admin"])
class ProductReviewView(APIView):
    permission_classes = [IsAuthenticated, IsMarketplaceAdmin]
    service = build_product_service()
    log = logger.bind(view="ProductReviewView")

    @extend_schema(
        summary="Approve or reject a pending product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        request=ProductReviewSerializer,
        responses={
            200: ProductReviewReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, product_id: int):
        serializer = ProductReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto, error = self.service.review_product(
            product_id, serializer.validated_data, reviewer_id=request.user.id
        )
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response(ProductReviewReadSerializer(dto).data)
