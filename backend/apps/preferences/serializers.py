from rest_framework import serializers

from .stores import KNOWN_SCREENS


class WishlistSerializer(serializers.Serializer):
    items = serializers.ListField(child=serializers.CharField())


class WishlistToggleSerializer(serializers.Serializer):
    productId = serializers.CharField(max_length=64)


class WishlistToggleResultSerializer(serializers.Serializer):
    productId = serializers.CharField()
    wishlisted = serializers.BooleanField()
    items = serializers.ListField(child=serializers.CharField())


class WishlistContainsSerializer(serializers.Serializer):
    wishlisted = serializers.BooleanField()


class SearchHistorySerializer(serializers.Serializer):
    items = serializers.ListField(child=serializers.CharField())


class SearchHistoryWriteSerializer(serializers.Serializer):
    query = serializers.CharField(max_length=200)


class ScreenSerializer(serializers.Serializer):
    screen = serializers.ChoiceField(choices=list(KNOWN_SCREENS))
