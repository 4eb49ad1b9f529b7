from rest_framework import serializers

from .models import OrderStatus


class OrderItemSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source="product_id", allow_null=True)
    productName = serializers.CharField(source="product_name")
    quantity = serializers.IntegerField()
    price = serializers.CharField()
    variations = serializers.DictField()


class OrderSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    status = serializers.CharField()
    channel = serializers.CharField()
    subtotal = serializers.CharField()
    shipping = serializers.CharField()
    total = serializers.CharField()
    items = OrderItemSerializer(many=True)
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    courierId = serializers.IntegerField(source="courier_id", allow_null=True)
    possessionConfirmedAt = serializers.CharField(
        source="possession_confirmed_at", allow_null=True
    )
    deliveredAt = serializers.CharField(source="delivered_at", allow_null=True)


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
