from rest_framework.permissions import BasePermission


class IsMarketplaceAdmin(BasePermission):
    """Admins and super admins; Django superusers always qualify."""

    message = "Administrator role required"

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "is_privileged", False)
        )


class IsSellerOrAdmin(BasePermission):
    message = "Seller role required"

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(
            user and user.is_authenticated and getattr(user, "can_sell", False)
        )


class IsCourierOrAdmin(BasePermission):
    message = "Courier role required"

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(
            user
            and user.is_authenticated
            and (getattr(user, "is_courier", False) or getattr(user, "is_privileged", False))
        )
