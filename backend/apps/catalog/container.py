from __future__ import annotations

from django.conf import settings
from django.core.cache import cache
from django.utils.module_loading import import_string

from apps.notifications.container import build_notification_service
from .repositories import ProductRepository
from .services import CategoryService, ProductService, SuggestionService


def build_product_service(*, disable_cache: bool = False) -> ProductService:
    return ProductService(
        products=ProductRepository(),
        cache_backend=cache,
        notifier=build_notification_service(),
        disable_cache=disable_cache,
    )


def build_suggestion_provider():
    path = getattr(settings, "CATALOG_SUGGESTION_PROVIDER", "")
    if not path:
        return None
    return import_string(path)()


def build_suggestion_service() -> SuggestionService:
    return SuggestionService(
        products=ProductRepository(), provider=build_suggestion_provider()
    )


def build_category_service() -> CategoryService:
    return CategoryService()
