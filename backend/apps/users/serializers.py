from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import UserRole

SELF_ASSIGNABLE_ROLES = (UserRole.USER, UserRole.SELLER)


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    firstName = serializers.CharField(source="first_name", read_only=True)
    lastName = serializers.CharField(source="last_name", read_only=True)
    name = serializers.CharField(read_only=True)
    phone = serializers.CharField(read_only=True)
    location = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)
    isPrivileged = serializers.BooleanField(source="is_privileged", read_only=True)
    dateJoined = serializers.CharField(source="date_joined", read_only=True, allow_null=True)


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    firstName = serializers.CharField(
        source="first_name", max_length=150, required=False, allow_blank=True
    )
    lastName = serializers.CharField(
        source="last_name", max_length=150, required=False, allow_blank=True
    )
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    location = serializers.CharField(max_length=120, required=False, allow_blank=True)
    role = serializers.ChoiceField(
        choices=[r.value for r in SELF_ASSIGNABLE_ROLES],
        required=False,
        default=UserRole.USER.value,
    )


class ProfileUpdateSerializer(serializers.Serializer):
    firstName = serializers.CharField(
        source="first_name", max_length=150, required=False, allow_blank=True
    )
    lastName = serializers.CharField(
        source="last_name", max_length=150, required=False, allow_blank=True
    )
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    location = serializers.CharField(max_length=120, required=False, allow_blank=True)


class MarketplaceTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Adds the marketplace role to the access token claims."""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = str(getattr(user, "role", UserRole.USER))
        return token
