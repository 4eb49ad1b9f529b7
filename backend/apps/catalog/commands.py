from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Union

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_decimal(raw: Any) -> Optional[Decimal]:
    if raw in (None, ""):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


def _parse_bool(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    text = str(raw or "").strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return None


@dataclass
class SearchFilters:
    query: str = ""
    category: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    # "all" means no restriction; otherwise True/False
    is_international: Union[bool, str] = "all"
    min_rating: Optional[Decimal] = None
    only_free_shipping: bool = False

    @property
    def has_text(self) -> bool:
        # Single characters are too broad to match against descriptions.
        return len(self.query) >= 2

    @staticmethod
    def from_raw(params: Mapping[str, Any]) -> "SearchFilters":
        """Build filters from query params; unparsable values are ignored."""
        data = params or {}
        international_raw = data.get("isInternational", "all")
        international: Union[bool, str] = "all"
        if str(international_raw).strip().lower() != "all":
            parsed = _parse_bool(international_raw)
            international = "all" if parsed is None else parsed
        min_rating = _parse_decimal(data.get("minRating"))
        return SearchFilters(
            query=str(data.get("q", "") or "").strip(),
            category=(str(data.get("category") or "").strip() or None),
            min_price=_parse_decimal(data.get("minPrice")),
            max_price=_parse_decimal(data.get("maxPrice")),
            is_international=international,
            min_rating=min_rating if min_rating else None,
            only_free_shipping=bool(_parse_bool(data.get("onlyFreeShipping"))),
        )


@dataclass
class ProductSubmitCommand:
    name: str
    price: Decimal
    category: str
    description: str = ""
    image: str = ""
    stock: int = 0
    old_price: Optional[Decimal] = None
    gallery: List[str] = field(default_factory=list)
    is_international: bool = False
    is_free_shipping: bool = False
    variations: List[Dict[str, Any]] = field(default_factory=list)

    @staticmethod
    def _normalize_variations(raw) -> List[Dict[str, Any]]:
        out = []
        for entry in raw or []:
            name = str(entry.get("name", "")).strip()
            options = [str(o).strip() for o in entry.get("options") or [] if str(o).strip()]
            if name and options:
                out.append({"name": name, "options": options})
        return out

    @staticmethod
    def from_raw(payload: Mapping[str, Any]) -> "ProductSubmitCommand":
        data = dict(payload or {})
        return ProductSubmitCommand(
            name=str(data.get("name", "")).strip(),
            price=Decimal(str(data.get("price", "0"))),
            category=str(data.get("category", "")).strip(),
            description=str(data.get("description", "") or "").strip(),
            image=str(data.get("image", "") or "").strip(),
            stock=int(data.get("stock") or 0),
            old_price=_parse_decimal(data.get("old_price")),
            gallery=[str(url) for url in data.get("gallery") or []],
            is_international=bool(data.get("is_international", False)),
            is_free_shipping=bool(data.get("is_free_shipping", False)),
            variations=ProductSubmitCommand._normalize_variations(data.get("variations")),
        )


@dataclass
class ReviewCommand:
    product_id: int
    approve: bool
    reason: str = ""

    @staticmethod
    def from_raw(product_id: int, payload: Mapping[str, Any]) -> "ReviewCommand":
        data = dict(payload or {})
        decision = str(data.get("decision", "")).strip().upper()
        return ReviewCommand(
            product_id=product_id,
            approve=decision == "APPROVE",
            reason=str(data.get("reason", "") or "").strip(),
        )
