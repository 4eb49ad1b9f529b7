"""Static storefront taxonomy. Products store the category name as plain text."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    slug: str
    subcategories: List[str] = field(default_factory=list)


CATEGORIES: List[Category] = [
    Category(
        "1",
        "Eletrónicos",
        "eletronicos",
        ["Smartphones", "Laptops", "Tablets", "Acessórios", "Áudio", "TVs"],
    ),
    Category(
        "2",
        "Moda e Vestuário",
        "moda",
        ["Homem", "Mulher", "Crianças", "Calçado", "Relógios", "Malas"],
    ),
    Category(
        "3",
        "Casa e Lazer",
        "casa",
        ["Cozinha", "Quarto", "Sala", "Jardim", "Decoração", "Limpeza"],
    ),
    Category(
        "4",
        "Fotografia",
        "fotografia",
        ["Câmaras", "Lentes", "Tripés", "Iluminação Estúdio", "Bolsas", "Drones"],
    ),
    Category(
        "5",
        "Peças Auto",
        "pecas-auto",
        ["Motores", "Pneus", "Iluminação", "Som", "Acessórios Interior", "Travões"],
    ),
    Category(
        "6",
        "Gaming",
        "gaming",
        ["Playstation", "Xbox", "Nintendo", "PC Gaming", "Cadeiras", "Jogos"],
    ),
    Category(
        "7",
        "Bebé e Kids",
        "bebe",
        ["Roupa", "Brinquedos", "Carrinhos", "Alimentação", "Higiene", "Mobiliário"],
    ),
]


def find_category(slug_or_name: str) -> Optional[Category]:
    needle = (slug_or_name or "").strip().lower()
    for category in CATEGORIES:
        if needle in (category.slug, category.name.lower()):
            return category
    return None
