from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Product, ProductStatus
from apps.orders.models import Order
from apps.users.models import User, UserRole

SELLERS = [
    # (username, store name, email)
    ("kandengue", "Kandengue Store", "kandengue@angoplace.ao"),
    ("lojadopovo", "Loja do Povo Luanda", "povo@angoplace.ao"),
    ("techzona", "TechZona AO", "techzona@angoplace.ao"),
]

STAFF = [
    {
        "username": "admin",
        "email": "admin@angoplace.ao",
        "password": "admin123!",
        "role": UserRole.SUPER_ADMIN,
        "is_superuser": True,
    },
    {
        "username": "cliente",
        "email": "cliente@angoplace.ao",
        "password": "cliente123!",
        "role": UserRole.USER,
        "is_superuser": False,
        "location": "Luanda, Talatona",
    },
    {
        "username": "estafeta",
        "email": "estafeta@angoplace.ao",
        "password": "estafeta123!",
        "role": UserRole.COURIER,
        "is_superuser": False,
        "location": "Luanda, Viana",
    },
]

SELLER_PASSWORD = "vendedor123!"

PRODUCTS = [
    {
        "name": "Smartphone Pro Max Edição Luanda",
        "price": 450000,
        "old_price": 550000,
        "image": "https://picsum.photos/seed/phone/400/400",
        "gallery": [
            "https://picsum.photos/seed/phone1/600/600",
            "https://picsum.photos/seed/phone2/600/600",
            "https://picsum.photos/seed/phone3/600/600",
        ],
        "category": "Eletrónicos",
        "rating": "4.8",
        "sales": 1200,
        "is_international": True,
        "is_free_shipping": True,
        "is_flash_deal": True,
        "seller": "kandengue",
        "description": "O melhor smartphone para quem vive o lifestyle de Luanda. "
        "Bateria de longa duração e câmera ultra potente.",
        "stock": 25,
        "variations": [
            {"name": "Cor", "options": ["Grafite", "Dourado", "Azul Marinho"]},
            {"name": "Armazenamento", "options": ["128GB", "256GB", "512GB"]},
        ],
    },
    {
        "name": "Sapatos Sociais Couro Legítimo",
        "price": 35000,
        "image": "https://picsum.photos/seed/shoes/400/400",
        "category": "Moda",
        "rating": "4.5",
        "sales": 450,
        "seller": "lojadopovo",
        "description": "Elegância e conforto para eventos e trabalho. Feito à mão em Angola.",
        "stock": 50,
        "variations": [{"name": "Tamanho", "options": ["38", "39", "40", "41", "42"]}],
    },
    {
        "name": "Gerador Gasolina 5KVA Silencioso",
        "price": 385000,
        "old_price": 450000,
        "image": "https://picsum.photos/seed/generator/400/400",
        "gallery": [
            "https://picsum.photos/seed/gen1/600/600",
            "https://picsum.photos/seed/gen2/600/600",
        ],
        "category": "Energia",
        "rating": "4.9",
        "sales": 890,
        "is_international": True,
        "is_free_shipping": True,
        "is_flash_deal": True,
        "seller": "techzona",
        "description": "Gerador potente e silencioso, ideal para residências e escritórios "
        "em Angola. Consumo económico de combustível.",
        "stock": 15,
        "variations": [{"name": "Potência", "options": ["3KVA", "5KVA", "7KVA"]}],
    },
    {
        "name": "Kit Painel Solar 300W Completo",
        "price": 180000,
        "old_price": 220000,
        "image": "https://picsum.photos/seed/solar/400/400",
        "gallery": [
            "https://picsum.photos/seed/solar1/600/600",
            "https://picsum.photos/seed/solar2/600/600",
        ],
        "category": "Energia",
        "rating": "4.7",
        "sales": 567,
        "is_international": True,
        "is_free_shipping": True,
        "seller": "techzona",
        "description": "Kit completo com painel, inversor e bateria. Perfeito para iluminação "
        "e aparelhos básicos. Instalação incluída em Luanda.",
        "stock": 20,
        "variations": [{"name": "Capacidade", "options": ["200W", "300W", "500W"]}],
    },
    {
        "name": "Cerveja Cuca (Grade 24 Unidades)",
        "price": 12500,
        "image": "https://picsum.photos/seed/cuca/400/400",
        "category": "Bebidas",
        "rating": "4.9",
        "sales": 3500,
        "seller": "lojadopovo",
        "description": "A cerveja angolana mais amada! Grade com 24 garrafas de 330ml. "
        "Entrega gelada disponível.",
        "stock": 200,
    },
    {
        "name": 'Smart TV 55" 4K Android',
        "price": 320000,
        "old_price": 380000,
        "image": "https://picsum.photos/seed/tv/400/400",
        "gallery": [
            "https://picsum.photos/seed/tv1/600/600",
            "https://picsum.photos/seed/tv2/600/600",
        ],
        "category": "Eletrónicos",
        "rating": "4.6",
        "sales": 234,
        "is_international": True,
        "is_free_shipping": True,
        "is_flash_deal": True,
        "seller": "kandengue",
        "description": "Televisão 4K com sistema Android integrado. Netflix, YouTube e DStv Now "
        "prontos para usar.",
        "stock": 12,
        "variations": [{"name": "Tamanho", "options": ['43"', '50"', '55"', '65"']}],
    },
    {
        "name": "Ar Condicionado Split 12000 BTU",
        "price": 165000,
        "old_price": 195000,
        "image": "https://picsum.photos/seed/ac/400/400",
        "category": "Casa",
        "rating": "4.4",
        "sales": 678,
        "is_international": True,
        "is_free_shipping": True,
        "seller": "techzona",
        "description": "Ar condicionado inverter económico. Instalação profissional disponível "
        "em Luanda e arredores.",
        "stock": 30,
        "variations": [{"name": "BTU", "options": ["9000", "12000", "18000", "24000"]}],
    },
    {
        "name": "Vestido Tradicional Angolano",
        "price": 45000,
        "image": "https://picsum.photos/seed/dress/400/400",
        "gallery": [
            "https://picsum.photos/seed/dress1/600/600",
            "https://picsum.photos/seed/dress2/600/600",
        ],
        "category": "Moda",
        "rating": "4.8",
        "sales": 890,
        "seller": "lojadopovo",
        "description": "Vestido feito com tecido africano autêntico. Design exclusivo por "
        "estilistas angolanas. Perfeito para festas e eventos culturais.",
        "stock": 40,
        "variations": [
            {"name": "Tamanho", "options": ["S", "M", "L", "XL"]},
            {"name": "Cor", "options": ["Vermelho/Amarelo", "Azul/Verde", "Preto/Dourado"]},
        ],
    },
]


class Command(BaseCommand):
    help = "Seed the AngoPlace demo catalogue, sellers and accounts in one operation."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing catalogue and orders before seeding"
        )

    def _upsert_user(self, username, email, password, **fields):
        user, created = User.objects.get_or_create(
            username=username, defaults={"email": email, **fields}
        )
        if not created:
            user.email = email
            for field, value in fields.items():
                setattr(user, field, value)
        user.set_password(password)
        user.save()
        return user

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            Order.objects.all().delete()
            Product.objects.all().delete()

        self.stdout.write("Seeding accounts...")
        for payload in STAFF:
            attrs = dict(payload)
            is_superuser = attrs.pop("is_superuser")
            self._upsert_user(
                attrs.pop("username"),
                attrs.pop("email"),
                attrs.pop("password"),
                is_superuser=is_superuser,
                is_staff=is_superuser,
                **attrs,
            )

        self.stdout.write("Seeding sellers...")
        sellers = {}
        for username, store_name, email in SELLERS:
            sellers[username] = self._upsert_user(
                username,
                email,
                SELLER_PASSWORD,
                first_name=store_name,
                role=UserRole.SELLER,
                location="Luanda",
            )

        self.stdout.write("Seeding products...")
        for payload in PRODUCTS:
            attrs = dict(payload)
            seller = sellers[attrs.pop("seller")]
            defaults = {
                **attrs,
                "price": Decimal(attrs["price"]),
                "rating": Decimal(attrs["rating"]),
                "status": ProductStatus.PUBLICADO,
                "seller": seller,
            }
            if "old_price" in attrs:
                defaults["old_price"] = Decimal(attrs["old_price"])
            Product.objects.update_or_create(name=attrs["name"], defaults=defaults)

        self.stdout.write(self.style.SUCCESS("AngoPlace seed completed."))
