import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.AutoField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "old_price",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                ("image", models.TextField(blank=True, default="")),
                ("gallery", models.JSONField(blank=True, default=list)),
                ("category", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "rating",
                    models.DecimalField(decimal_places=1, default=0, max_digits=2),
                ),
                ("sales", models.PositiveIntegerField(default=0)),
                ("stock", models.PositiveIntegerField(default=0)),
                ("is_international", models.BooleanField(default=False)),
                ("is_free_shipping", models.BooleanField(default=False)),
                ("is_flash_deal", models.BooleanField(default=False)),
                ("variations", models.JSONField(blank=True, default=list)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDENTE", "Pendente"),
                            ("PUBLICADO", "Publicado"),
                            ("REJEITADO", "Rejeitado"),
                        ],
                        default="PENDENTE",
                        max_length=16,
                    ),
                ),
                ("review_reason", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "seller",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "products",
                "indexes": [
                    models.Index(
                        fields=["status", "category"], name="product_status_cat_idx"
                    ),
                    models.Index(fields=["name"], name="product_name_idx"),
                    models.Index(fields=["rating"], name="product_rating_idx"),
                ],
            },
        ),
    ]
