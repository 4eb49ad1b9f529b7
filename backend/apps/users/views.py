from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_user_service
from .serializers import (
    MarketplaceTokenObtainPairSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)

logger = get_logger(__name__).bind(component="users", layer="view")


@extend_schema(tags=["Users"])
class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_user_service()
    log = logger.bind(view="RegisterView")

    @extend_schema(
        summary="Register a buyer or seller account",
        request=RegisterSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except DRFValidationError as exc:
            self.log.warning("Registration validation failed", errors=exc.detail)
            return error_response("VALIDATION_ERROR", "Invalid input", exc.detail)
        dto, error = self.service.register(dict(serializer.validated_data))
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response(UserSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Users"])
class MeView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_user_service()
    log = logger.bind(view="MeView")

    @extend_schema(summary="Current user profile", responses={200: UserSerializer})
    def get(self, request):
        dto = self.service.get_profile(request.user.id)
        if not dto:
            return error_response("NOT_FOUND", "User not found", {"id": str(request.user.id)})
        return Response(UserSerializer(dto).data)

    @extend_schema(
        summary="Update current user profile",
        request=ProfileUpdateSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        try:
            serializer.is_valid(raise_exception=True)
        except DRFValidationError as exc:
            self.log.warning("Profile update validation failed", errors=exc.detail)
            return error_response("VALIDATION_ERROR", "Invalid input", exc.detail)
        dto = self.service.update_profile(request.user.id, dict(serializer.validated_data))
        if not dto:
            return error_response("NOT_FOUND", "User not found", {"id": str(request.user.id)})
        return Response(UserSerializer(dto).data)


@extend_schema(tags=["Auth"], summary="Login (JWT obtain pair)")
class LoginView(TokenObtainPairView):
    permission_classes = [AllowAny]
    serializer_class = MarketplaceTokenObtainPairSerializer


@extend_schema(tags=["Auth"], summary="Refresh JWT")
class RefreshView(TokenRefreshView):
    permission_classes = [AllowAny]
