from django.conf import settings
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.common.i18n import PROOF_REQUIRED
from apps.orders.models import PaymentChannel

PROOF_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp", "application/pdf")


class CheckoutStatusSerializer(serializers.Serializer):
    attemptId = serializers.CharField(source="attempt_id")
    state = serializers.CharField()
    channel = serializers.CharField(allow_null=True)
    destination = serializers.CharField(allow_null=True)
    hasProof = serializers.BooleanField(source="has_proof")
    countdownSeconds = serializers.IntegerField(source="countdown_seconds")
    remainingSeconds = serializers.IntegerField(source="remaining_seconds")
    amount = serializers.CharField()
    orderId = serializers.IntegerField(source="order_id", allow_null=True)
    error = serializers.CharField(allow_null=True)


class CheckoutSubmitSerializer(serializers.Serializer):
    channel = serializers.ChoiceField(choices=PaymentChannel.choices)
    destination = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=32
    )


class ProofUploadSerializer(serializers.Serializer):
    file = serializers.FileField(required=False)
    proofUrl = serializers.URLField(required=False)

    def validate_file(self, value):
        if value.size > settings.CHECKOUT_PROOF_MAX_BYTES:
            raise serializers.ValidationError(_("The receipt file is too large"))
        content_type = getattr(value, "content_type", None)
        if content_type and content_type not in PROOF_CONTENT_TYPES:
            raise serializers.ValidationError(_("Upload an image or a PDF receipt"))
        return value

    def validate(self, attrs):
        if not attrs.get("file") and not attrs.get("proofUrl"):
            raise serializers.ValidationError(PROOF_REQUIRED)
        return attrs


class PaymentConfirmationSerializer(serializers.Serializer):
    attemptId = serializers.CharField(max_length=64)
