from rest_framework import serializers


class CartLineSerializer(serializers.Serializer):
    productId = serializers.CharField(source="product_id")
    name = serializers.CharField()
    image = serializers.CharField()
    unitPrice = serializers.CharField(source="unit_price")
    quantity = serializers.IntegerField()
    options = serializers.DictField(child=serializers.CharField())
    lineTotal = serializers.CharField(source="line_total")


class CartTotalsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    subtotal = serializers.CharField()
    shipping = serializers.CharField()
    total = serializers.CharField()


class CartSerializer(serializers.Serializer):
    lines = CartLineSerializer(many=True)
    totals = CartTotalsSerializer()


class CartItemAddSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source="product_id")
    # Positivity is enforced by CartStore.add_item.
    quantity = serializers.IntegerField(required=False, default=1)
    options = serializers.DictField(
        child=serializers.CharField(max_length=60), required=False, default=dict
    )


class CartQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


class CartMembershipSerializer(serializers.Serializer):
    productId = serializers.CharField()
    inCart = serializers.BooleanField()
