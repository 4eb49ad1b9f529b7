from typing import Iterable, List

from .categories import Category
from .dtos import CategoryDTO, ProductDTO, VariationDTO
from .models import Product


def _variations(raw) -> List[VariationDTO]:
    out = []
    for entry in raw or []:
        if not isinstance(entry, dict):
            continue
        out.append(
            VariationDTO(
                name=str(entry.get("name", "")),
                options=[str(o) for o in entry.get("options") or []],
            )
        )
    return out


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(
            id=cat.id, name=cat.name, slug=cat.slug, subcategories=list(cat.subcategories)
        )

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        old_price = getattr(product, "old_price", None)
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=str(product.price),
            old_price=str(old_price) if old_price is not None else None,
            image=product.image or "",
            gallery=list(product.gallery or []),
            category=product.category,
            description=product.description or "",
            rating=str(product.rating),
            sales=product.sales,
            stock=product.stock,
            is_international=bool(product.is_international),
            is_free_shipping=bool(product.is_free_shipping),
            is_flash_deal=bool(product.is_flash_deal),
            status=str(product.status),
            seller_id=getattr(product, "seller_id", None),
            variations=_variations(product.variations),
            review_reason=getattr(product, "review_reason", "") or "",
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
