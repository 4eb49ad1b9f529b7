from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.catalog.models import Product, ProductStatus
from apps.users.models import User, UserRole


class SeedMarketplaceCommandTests(TestCase):
    def seed(self, *args):
        out = StringIO()
        call_command("seed_marketplace", *args, stdout=out)
        return out.getvalue()

    def test_seeds_published_catalogue_with_sellers(self):
        output = self.seed()
        self.assertIn("AngoPlace seed completed.", output)
        self.assertEqual(Product.objects.count(), 8)
        self.assertFalse(Product.objects.exclude(status=ProductStatus.PUBLICADO).exists())
        gerador = Product.objects.get(name="Gerador Gasolina 5KVA Silencioso")
        self.assertEqual(gerador.seller.username, "techzona")
        self.assertEqual(gerador.seller.role, UserRole.SELLER)
        self.assertEqual(gerador.variations[0]["options"], ["3KVA", "5KVA", "7KVA"])

    def test_admin_account_is_privileged_and_can_log_in(self):
        self.seed()
        admin = User.objects.get(username="admin")
        self.assertTrue(admin.is_privileged)
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.check_password("admin123!"))

    def test_courier_account_is_seeded(self):
        self.seed()
        courier = User.objects.get(username="estafeta")
        self.assertTrue(courier.is_courier)
        self.assertFalse(courier.is_privileged)

    def test_running_twice_does_not_duplicate(self):
        self.seed()
        self.seed()
        self.assertEqual(Product.objects.count(), 8)
        self.assertEqual(User.objects.filter(role=UserRole.SELLER).count(), 3)

    def test_flush_removes_unseeded_products(self):
        Product.objects.create(name="Produto antigo", price=1000, category="Casa")
        self.seed("--flush")
        self.assertFalse(Product.objects.filter(name="Produto antigo").exists())
        self.assertEqual(Product.objects.count(), 8)
