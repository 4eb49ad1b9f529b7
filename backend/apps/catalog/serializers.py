from django.utils.translation import gettext_lazy as _
from rest_framework import serializers


class VariationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=60)
    options = serializers.ListField(
        child=serializers.CharField(max_length=60), allow_empty=False
    )


class CategorySerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    slug = serializers.CharField()
    subcategories = serializers.ListField(child=serializers.CharField())


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.CharField()
    oldPrice = serializers.CharField(source="old_price", allow_null=True)
    image = serializers.CharField()
    gallery = serializers.ListField(child=serializers.CharField())
    category = serializers.CharField()
    description = serializers.CharField()
    rating = serializers.CharField()
    sales = serializers.IntegerField()
    stock = serializers.IntegerField()
    isInternational = serializers.BooleanField(source="is_international")
    isFreeShipping = serializers.BooleanField(source="is_free_shipping")
    isFlashDeal = serializers.BooleanField(source="is_flash_deal")
    status = serializers.CharField()
    sellerId = serializers.IntegerField(source="seller_id", allow_null=True)
    variations = VariationSerializer(many=True)


class ProductReviewReadSerializer(ProductReadSerializer):
    reviewReason = serializers.CharField(source="review_reason")


class ProductSubmitSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    oldPrice = serializers.DecimalField(
        source="old_price",
        max_digits=12,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
    )
    category = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    image = serializers.CharField(required=False, allow_blank=True, default="")
    gallery = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    stock = serializers.IntegerField(min_value=0)
    isInternational = serializers.BooleanField(
        source="is_international", required=False, default=False
    )
    isFreeShipping = serializers.BooleanField(
        source="is_free_shipping", required=False, default=False
    )
    variations = VariationSerializer(many=True, required=False, default=list)

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError(_("Price must be greater than zero."))
        return value


class ProductReviewSerializer(serializers.Serializer):
    decision = serializers.ChoiceField(choices=["APPROVE", "REJECT"])
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class SuggestionItemSerializer(serializers.Serializer):
    kind = serializers.CharField()
    text = serializers.CharField()


class SuggestionsSerializer(serializers.Serializer):
    query = serializers.CharField(allow_blank=True)
    items = SuggestionItemSerializer(many=True)
    assistant = serializers.ListField(child=serializers.CharField())
    meta = serializers.DictField()
