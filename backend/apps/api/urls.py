from django.urls import include, path

from apps.users.views import LoginView, RefreshView

urlpatterns = [
    path("", include("apps.catalog.urls")),
    path("auth/login/", LoginView.as_view(), name="auth-login"),
    path("auth/refresh/", RefreshView.as_view(), name="auth-refresh"),
    path("users/", include("apps.users.urls")),
    path("cart/", include("apps.carts.urls")),
    path("checkout/", include("apps.checkout.urls")),
    path("orders/", include("apps.orders.urls")),
    path("notifications/", include("apps.notifications.urls")),
    path("preferences/", include("apps.preferences.urls")),
]
