from typing import List, Optional

from django.db.models import Q

from apps.common.repository import GenericRepository
from .commands import SearchFilters
from .models import Product, ProductStatus


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def _published(self):
        return self.model.objects.filter(status=ProductStatus.PUBLICADO)

    def list_published(self, category: Optional[str] = None):
        qs = self._published()
        if category:
            qs = qs.filter(category__iexact=category)
        return qs.order_by("-created_at", "-id")

    def list_pending(self):
        return (
            self.model.objects.filter(status=ProductStatus.PENDENTE)
            .select_related("seller")
            .order_by("created_at", "id")
        )

    def search(self, filters: SearchFilters):
        qs = self._published()
        if filters.has_text:
            term = filters.query
            qs = qs.filter(
                Q(name__icontains=term)
                | Q(category__icontains=term)
                | Q(description__icontains=term)
            )
        if filters.category:
            qs = qs.filter(category__iexact=filters.category)
        if filters.min_price is not None:
            qs = qs.filter(price__gte=filters.min_price)
        if filters.max_price is not None:
            qs = qs.filter(price__lte=filters.max_price)
        if filters.is_international != "all":
            qs = qs.filter(is_international=filters.is_international)
        if filters.min_rating:
            qs = qs.filter(rating__gte=filters.min_rating)
        if filters.only_free_shipping:
            qs = qs.filter(is_free_shipping=True)
        return qs.order_by("-sales", "id")

    def names_matching(self, text: str, limit: int) -> List[str]:
        return list(
            self._published()
            .filter(name__icontains=text)
            .order_by("-sales", "id")
            .values_list("name", flat=True)[:limit]
        )
