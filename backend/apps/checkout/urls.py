from django.urls import path

from .views import (
    CheckoutCancelView,
    CheckoutProofView,
    CheckoutRetryView,
    CheckoutView,
    PaymentConfirmationView,
)

urlpatterns = [
    path("", CheckoutView.as_view(), name="api-checkout"),
    path("proof/", CheckoutProofView.as_view(), name="api-checkout-proof"),
    path("cancel/", CheckoutCancelView.as_view(), name="api-checkout-cancel"),
    path("retry/", CheckoutRetryView.as_view(), name="api-checkout-retry"),
    path("confirm/", PaymentConfirmationView.as_view(), name="api-checkout-confirm"),
]
