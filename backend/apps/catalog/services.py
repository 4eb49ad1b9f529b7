from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from django.db import DatabaseError, transaction
from django.utils.translation import gettext as _
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from apps.common import get_logger
from apps.common.i18n import PRODUCT_NOT_FOUND, REVIEW_NOT_ALLOWED
from apps.notifications.models import NotificationKind
from apps.notifications.protocols import NotifierProtocol
from .categories import CATEGORIES, find_category
from .commands import ProductSubmitCommand, ReviewCommand, SearchFilters
from .dtos import CategoryDTO, ProductDTO, SuggestionDTO, SuggestionsDTO
from .mappers import CategoryMapper, ProductMapper
from .models import Product, ProductStatus
from .protocols import (
    CacheBackendProtocol,
    ProductRepositoryProtocol,
    SuggestionProviderProtocol,
)

logger = get_logger(__name__).bind(component="catalog", layer="service")

ServiceError = Tuple[str, Any, Optional[Dict[str, Any]]]

MAX_SUGGESTIONS = 5
MAX_PRODUCT_SUGGESTIONS = 3


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        notifier: Optional[NotifierProtocol] = None,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.notifier = notifier
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        self._cache_prefix = "products:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def _bump_cache_version(self) -> None:
        v = self._get_cache_version()
        # Version key should not expire
        self.cache.set(self._cache_version_key, v + 1, timeout=None)
        self.logger.debug("Bumped product cache version", new_version=v + 1)

    def _cache_key(self, category: Optional[str]) -> str:
        version = self._get_cache_version()
        cat = (category or "all").lower()
        return f"{self._cache_prefix}:v{version}:{cat}"

    def list_products(self, category: Optional[str] = None) -> List[ProductDTO]:
        self.logger.debug(
            "Listing products", category=category, cache_enabled=not self.disable_cache
        )
        if self.disable_cache:
            return ProductMapper.many_to_dto(self.products.list_published(category))
        key = self._cache_key(category)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        data = ProductMapper.many_to_dto(self.products.list_published(category))
        self.cache.set(key, data)
        return data

    def list_products_paginated(
        self,
        request,
        *,
        category: Optional[str] = None,
        paginator_class: Optional[Type[PageNumberPagination]] = None,
        serializer_class=None,
        view=None,
    ):
        paginator = (paginator_class or PageNumberPagination)()
        data = self.list_products(category)
        page = paginator.paginate_queryset(data, request, view=view)
        if serializer_class is None:
            from .serializers import ProductReadSerializer  # Avoid circular import

            serializer_class = ProductReadSerializer
        if page is None:
            return Response(serializer_class(data, many=True).data)
        return paginator.get_paginated_response(serializer_class(page, many=True).data)

    def get_product(
        self,
        product_id: int,
        *,
        viewer_id: Optional[int] = None,
        viewer_privileged: bool = False,
    ) -> Optional[ProductDTO]:
        """Published products are public; others only reach their seller and admins."""
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            return None
        if product.status != ProductStatus.PUBLICADO and not viewer_privileged:
            if viewer_id is None or product.seller_id != viewer_id:
                self.logger.info(
                    "Unpublished product hidden", product_id=product_id, viewer_id=viewer_id
                )
                return None
        return ProductMapper.to_dto(product)

    def search(self, filters: Union[SearchFilters, Mapping[str, Any]]) -> List[ProductDTO]:
        cmd = filters if isinstance(filters, SearchFilters) else SearchFilters.from_raw(filters)
        self.logger.debug(
            "Searching products",
            query=cmd.query,
            category=cmd.category,
            international=cmd.is_international,
        )
        return ProductMapper.many_to_dto(self.products.search(cmd))

    def submit_product(
        self, seller_id: int, data: Union[Mapping[str, Any], ProductSubmitCommand]
    ) -> ProductDTO:
        cmd = data if isinstance(data, ProductSubmitCommand) else ProductSubmitCommand.from_raw(data)
        self.logger.info("Submitting product", seller_id=seller_id, name=cmd.name)
        product: Product = self.products.create(
            name=cmd.name,
            price=cmd.price,
            old_price=cmd.old_price,
            category=cmd.category,
            description=cmd.description,
            image=cmd.image,
            gallery=cmd.gallery,
            stock=cmd.stock,
            is_international=cmd.is_international,
            is_free_shipping=cmd.is_free_shipping,
            variations=cmd.variations,
            status=ProductStatus.PENDENTE,
            seller_id=seller_id,
        )
        self.logger.info("Product submitted for review", product_id=product.id)
        return ProductMapper.to_dto(product)

    def list_pending(self) -> List[ProductDTO]:
        self.logger.debug("Listing products pending review")
        return ProductMapper.many_to_dto(self.products.list_pending())

    def review_product(
        self,
        product_id: int,
        data: Union[Mapping[str, Any], ReviewCommand],
        *,
        reviewer_id: Optional[int] = None,
    ) -> Tuple[Optional[ProductDTO], Optional[ServiceError]]:
        cmd = data if isinstance(data, ReviewCommand) else ReviewCommand.from_raw(product_id, data)
        self.logger.info(
            "Reviewing product",
            product_id=product_id,
            approve=cmd.approve,
            reviewer_id=reviewer_id,
        )
        product = self.products.get(id=product_id)
        if not product:
            self.logger.warning("Review failed: product not found", product_id=product_id)
            return None, ("NOT_FOUND", PRODUCT_NOT_FOUND, {"id": str(product_id)})
        if product.status != ProductStatus.PENDENTE:
            self.logger.warning(
                "Review rejected: product not pending",
                product_id=product_id,
                status=product.status,
            )
            return None, ("CONFLICT", REVIEW_NOT_ALLOWED, {"status": str(product.status)})
        new_status = ProductStatus.PUBLICADO if cmd.approve else ProductStatus.REJEITADO
        with transaction.atomic():
            product = self.products.update(
                product, status=new_status, review_reason=cmd.reason
            )
            self._notify_seller(product, cmd)
        if cmd.approve:
            self._bump_cache_version()
        self.logger.info("Product reviewed", product_id=product_id, status=new_status)
        return ProductMapper.to_dto(product), None

    def _notify_seller(self, product: Product, cmd: ReviewCommand) -> None:
        seller_id = getattr(product, "seller_id", None)
        if self.notifier is None or seller_id is None:
            return
        if cmd.approve:
            title = _("Product approved")
            message = _(
                'Your product "%(name)s" was approved and is now visible in the marketplace.'
            ) % {"name": product.name}
        else:
            title = _("Product rejected")
            message = _('Your product "%(name)s" was not approved. Reason: %(reason)s') % {
                "name": product.name,
                "reason": cmd.reason or _("It does not meet the requirements."),
            }
        self.notifier.notify(seller_id, title, message, NotificationKind.PRODUCT_STATUS)


class SuggestionService:
    """History matches first, then product names; an optional provider adds advisory text."""

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        provider: Optional[SuggestionProviderProtocol] = None,
    ):
        self.products = products
        self.provider = provider
        self.logger = logger.bind(service="SuggestionService")

    def suggest(self, query: str, history: Sequence[str] = ()) -> SuggestionsDTO:
        text = (query or "").strip()
        if not text:
            return SuggestionsDTO(query=text, items=[])
        needle = text.lower()
        items = [
            SuggestionDTO(kind="history", text=h)
            for h in history
            if needle in h.lower()
        ]
        meta: Dict[str, Any] = {}
        try:
            names = self.products.names_matching(needle, MAX_PRODUCT_SUGGESTIONS)
        except DatabaseError as exc:
            self.logger.warning("Product suggestions unavailable", error=str(exc))
            names = []
            meta["productsUnavailable"] = True
        items.extend(SuggestionDTO(kind="product", text=n) for n in names)
        assistant = self._assistant_suggestions(text, meta)
        return SuggestionsDTO(
            query=text, items=items[:MAX_SUGGESTIONS], assistant=assistant, meta=meta
        )

    def _assistant_suggestions(self, text: str, meta: Dict[str, Any]) -> List[str]:
        if self.provider is None or len(text) < 2:
            return []
        try:
            raw = self.provider.suggest(text, MAX_SUGGESTIONS)
        except Exception as exc:  # provider failures never break search
            self.logger.warning(
                "Suggestion provider failed",
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            meta["assistantUnavailable"] = True
            return []
        return [str(s) for s in (raw or []) if str(s).strip()][:MAX_SUGGESTIONS]


class CategoryService:
    def __init__(self):
        self.logger = logger.bind(service="CategoryService")

    def list_categories(self) -> List[CategoryDTO]:
        self.logger.debug("Listing categories")
        return CategoryMapper.many_to_dto(CATEGORIES)

    def get_category(self, slug: str) -> Optional[CategoryDTO]:
        category = find_category(slug)
        if not category:
            self.logger.info("Category not found", slug=slug)
            return None
        return CategoryMapper.to_dto(category)
