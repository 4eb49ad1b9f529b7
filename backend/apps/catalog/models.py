from django.db import models

from apps.users.models import User


class ProductStatus(models.TextChoices):
    PENDENTE = "PENDENTE", "Pendente"
    PUBLICADO = "PUBLICADO", "Publicado"
    REJEITADO = "REJEITADO", "Rejeitado"


class Product(models.Model):
    id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    old_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    image = models.TextField(blank=True, default="")
    gallery = models.JSONField(default=list, blank=True)
    category = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    rating = models.DecimalField(max_digits=2, decimal_places=1, default=0)
    sales = models.PositiveIntegerField(default=0)
    stock = models.PositiveIntegerField(default=0)
    is_international = models.BooleanField(default=False)
    is_free_shipping = models.BooleanField(default=False)
    is_flash_deal = models.BooleanField(default=False)
    # [{"name": "Cor", "options": ["Grafite", "Dourado"]}]
    variations = models.JSONField(default=list, blank=True)
    status = models.CharField(
        max_length=16, choices=ProductStatus.choices, default=ProductStatus.PENDENTE
    )
    seller = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    review_reason = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    @property
    def is_published(self) -> bool:
        return self.status == ProductStatus.PUBLICADO

    class Meta:
        db_table = "products"
        indexes = [
            models.Index(fields=["status", "category"], name="product_status_cat_idx"),
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["rating"], name="product_rating_idx"),
        ]
