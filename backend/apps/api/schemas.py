from typing import Dict

from drf_spectacular.utils import OpenApiResponse, inline_serializer
from rest_framework import serializers

from .utils import ERROR_STATUS_MAP


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.ChoiceField(choices=sorted(ERROR_STATUS_MAP))
    message = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)
    hint = serializers.CharField(required=False, allow_blank=True)
    extra = serializers.JSONField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    error = ErrorDetailSerializer()


def error_responses(*status_codes: int) -> Dict[int, OpenApiResponse]:
    """Map each HTTP status to the shared error envelope for ``extend_schema(responses=...)``."""
    return {
        code: OpenApiResponse(response=ErrorResponseSerializer)
        for code in status_codes
    }


def paginated_response(
    item_serializer_class: type[serializers.Serializer],
) -> type[serializers.Serializer]:
    """Inline serializer for a catalogue page: count, next, previous and results."""
    name = getattr(item_serializer_class, "__name__", "Items")
    return inline_serializer(
        name=f"Paginated{name}",
        fields={
            "count": serializers.IntegerField(),
            "next": serializers.CharField(allow_null=True),
            "previous": serializers.CharField(allow_null=True),
            "results": item_serializer_class(many=True),
        },
    )
