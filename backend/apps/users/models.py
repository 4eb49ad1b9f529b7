from django.contrib.auth.models import AbstractUser
from django.db import models


class UserRole(models.TextChoices):
    USER = "USER", "User"
    SELLER = "SELLER", "Seller"
    ADMIN = "ADMIN", "Admin"
    SUPER_ADMIN = "SUPER_ADMIN", "Super admin"
    COURIER = "COURIER", "Courier"


PRIVILEGED_ROLES = (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class User(AbstractUser):
    # id, username, password, first_name, last_name, is_staff, is_superuser are inherited
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True, default="")
    location = models.CharField(max_length=120, blank=True, default="")
    role = models.CharField(
        max_length=16, choices=UserRole.choices, default=UserRole.USER
    )

    @property
    def is_privileged(self) -> bool:
        return self.is_superuser or self.role in PRIVILEGED_ROLES

    @property
    def can_sell(self) -> bool:
        return self.role == UserRole.SELLER or self.is_privileged

    @property
    def is_courier(self) -> bool:
        return self.role == UserRole.COURIER

    @property
    def display_name(self) -> str:
        full = f"{self.first_name} {self.last_name}".strip()
        return full or self.username

    def __str__(self):
        return self.username
