from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="user",
            name="role",
            field=models.CharField(
                choices=[
                    ("USER", "User"),
                    ("SELLER", "Seller"),
                    ("ADMIN", "Admin"),
                    ("SUPER_ADMIN", "Super admin"),
                    ("COURIER", "Courier"),
                ],
                default="USER",
                max_length=16,
            ),
        ),
    ]
