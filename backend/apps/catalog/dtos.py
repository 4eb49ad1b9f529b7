from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class VariationDTO:
    name: str
    options: List[str]


@dataclass
class ProductDTO:
    id: int
    name: str
    price: str
    old_price: Optional[str]
    image: str
    gallery: List[str]
    category: str
    description: str
    rating: str
    sales: int
    stock: int
    is_international: bool
    is_free_shipping: bool
    is_flash_deal: bool
    status: str
    seller_id: Optional[int]
    variations: List[VariationDTO] = field(default_factory=list)
    review_reason: str = ""


@dataclass
class CategoryDTO:
    id: str
    name: str
    slug: str
    subcategories: List[str]


@dataclass
class SuggestionDTO:
    kind: str  # "history" | "product" | "assistant"
    text: str


@dataclass
class SuggestionsDTO:
    query: str
    items: List[SuggestionDTO]
    assistant: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)
