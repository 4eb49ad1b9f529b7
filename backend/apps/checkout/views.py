import hmac

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.exceptions import NotAuthenticated
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import error_responses
from apps.common import get_logger
from apps.common.i18n import LOGIN_REQUIRED_FOR_CHECKOUT
from .container import build_checkout_service
from .errors import InvalidCallbackTokenError, InvalidTransitionError
from .serializers import (
    CheckoutStatusSerializer,
    CheckoutSubmitSerializer,
    PaymentConfirmationSerializer,
    ProofUploadSerializer,
)
from .storage import discard_proof, store_proof

logger = get_logger(__name__).bind(component="checkout", layer="view")


class CheckoutAPIView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_checkout_service()

    def permission_denied(self, request, message=None, code=None):
        if request.authenticators and not request.successful_authenticator:
            raise NotAuthenticated(LOGIN_REQUIRED_FOR_CHECKOUT)
        super().permission_denied(request, message=message, code=code)

    def respond(self, dto):
        return Response(CheckoutStatusSerializer(dto).data)


@extend_schema(tags=["Checkout"])
class CheckoutView(CheckoutAPIView):
    log = logger.bind(view="CheckoutView")

    @extend_schema(
        summary="Current checkout attempt",
        responses={200: CheckoutStatusSerializer},
    )
    def get(self, request):
        return self.respond(self.service.status(request.user.id))

    @extend_schema(
        summary="Start a payment",
        description=(
            "EXPRESS sends a push to the given phone number and waits for the payment "
            "confirmation until the countdown ends. TRANSFER needs a receipt attached "
            "through /checkout/proof/ first. On success the order is written and the "
            "cart emptied; if the order cannot be written the attempt ends in FAILED "
            "and the cart is kept."
        ),
        request=CheckoutSubmitSerializer,
        responses={200: CheckoutStatusSerializer, **error_responses(400, 409, 502)},
    )
    def post(self, request):
        serializer = CheckoutSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self.log.debug("Checkout submit requested", user_id=request.user.id, channel=data["channel"])
        dto = self.service.submit(request.user.id, data["channel"], data.get("destination"))
        return self.respond(dto)


@extend_schema(tags=["Checkout"])
class CheckoutProofView(CheckoutAPIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    log = logger.bind(view="CheckoutProofView")

    @extend_schema(
        summary="Attach the transfer receipt",
        request={"multipart/form-data": ProofUploadSerializer},
        responses={200: CheckoutStatusSerializer, **error_responses(400, 409)},
    )
    def post(self, request):
        serializer = ProofUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data.get("file")
        if upload is None:
            reference = serializer.validated_data["proofUrl"]
            return self.respond(self.service.attach_proof(request.user.id, reference))
        reference = store_proof(request.user.id, upload)
        try:
            dto = self.service.attach_proof(request.user.id, reference)
        except InvalidTransitionError:
            self.log.warning("Proof rejected outside IDLE", user_id=request.user.id)
            discard_proof(reference)
            raise
        return self.respond(dto)


@extend_schema(tags=["Checkout"])
class CheckoutCancelView(CheckoutAPIView):
    log = logger.bind(view="CheckoutCancelView")

    @extend_schema(
        summary="Cancel the running payment",
        description="Stops the countdown and returns to IDLE. The cart is not changed.",
        request=None,
        responses={200: CheckoutStatusSerializer, **error_responses(409)},
    )
    def post(self, request):
        return self.respond(self.service.cancel(request.user.id))


@extend_schema(tags=["Checkout"])
class CheckoutRetryView(CheckoutAPIView):
    log = logger.bind(view="CheckoutRetryView")

    @extend_schema(
        summary="Reset a timed out or failed payment",
        request=None,
        responses={200: CheckoutStatusSerializer, **error_responses(409)},
    )
    def post(self, request):
        return self.respond(self.service.retry(request.user.id))


@extend_schema(tags=["Checkout"])
class PaymentConfirmationView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    service = build_checkout_service()
    log = logger.bind(view="PaymentConfirmationView")

    @extend_schema(
        summary="Payment collaborator confirmation callback",
        parameters=[
            OpenApiParameter(
                "X-Payment-Token", str, OpenApiParameter.HEADER, required=True
            )
        ],
        request=PaymentConfirmationSerializer,
        responses={200: CheckoutStatusSerializer, **error_responses(403, 409)},
    )
    def post(self, request):
        expected = getattr(settings, "PAYMENT_CALLBACK_TOKEN", "")
        supplied = request.headers.get("X-Payment-Token", "")
        if not expected or not hmac.compare_digest(supplied.encode(), expected.encode()):
            self.log.warning("Rejected payment callback")
            raise InvalidCallbackTokenError()
        serializer = PaymentConfirmationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.confirm(serializer.validated_data["attemptId"])
        self.log.info("Payment confirmed", attempt_id=dto.attempt_id, state=dto.state)
        return Response(CheckoutStatusSerializer(dto).data)
