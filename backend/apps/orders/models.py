from django.db import models

from apps.catalog.models import Product
from apps.users.models import User


class OrderStatus(models.TextChoices):
    PENDENTE = "PENDENTE", "Pendente"
    ATRIBUIDO = "ATRIBUIDO", "Atribuído"
    EM_POSSE = "EM_POSSE", "Em posse"
    PAGO = "PAGO", "Pago"
    EM_TRANSITO = "EM_TRANSITO", "Em trânsito"
    ENTREGUE = "ENTREGUE", "Entregue"


# Orders a courier can still claim.
AWAITING_COURIER = (OrderStatus.PENDENTE, OrderStatus.PAGO)

# Delivery steps a courier (or an admin) may take from each status.
DELIVERY_TRANSITIONS = {
    OrderStatus.PENDENTE: (OrderStatus.ATRIBUIDO,),
    OrderStatus.PAGO: (OrderStatus.ATRIBUIDO,),
    OrderStatus.ATRIBUIDO: (OrderStatus.EM_POSSE,),
    OrderStatus.EM_POSSE: (OrderStatus.EM_TRANSITO,),
    OrderStatus.EM_TRANSITO: (OrderStatus.ENTREGUE,),
}


class PaymentChannel(models.TextChoices):
    EXPRESS = "EXPRESS", "Multicaixa Express"
    TRANSFER = "TRANSFER", "Bank transfer"


class Order(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="orders")
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=16, choices=OrderStatus.choices, default=OrderStatus.PENDENTE
    )
    channel = models.CharField(max_length=16, choices=PaymentChannel.choices)
    destination = models.CharField(max_length=32, blank=True, default="")
    proof_reference = models.TextField(blank=True, default="")
    # One order per checkout attempt; a replayed confirmation cannot double-write.
    attempt_id = models.CharField(max_length=64, unique=True)
    courier = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="deliveries",
    )
    possession_confirmed_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
            models.Index(fields=["courier", "status"], name="order_courier_status_idx"),
        ]

    def __str__(self):
        return f"Order {self.id} ({self.status})"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        Product, on_delete=models.SET_NULL, null=True, related_name="order_items"
    )
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    variations = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "order_items"

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"
