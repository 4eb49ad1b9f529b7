from __future__ import annotations

from django.conf import settings
from django.utils.module_loading import import_string

from apps.carts.container import build_cart_store
from apps.orders.container import build_order_service
from .registry import AttemptRegistry
from .scheduler import ThreadingScheduler
from .services import CheckoutService

# Attempts are process-local; every CheckoutService shares this registry, so
# the API must run as a single worker process (see checks.single_worker_check).
attempt_registry = AttemptRegistry()
scheduler = ThreadingScheduler()


def build_payment_gateway():
    return import_string(settings.CHECKOUT_PAYMENT_GATEWAY)()


def build_transfer_verifier():
    return import_string(settings.CHECKOUT_TRANSFER_VERIFIER)()


def build_checkout_service() -> CheckoutService:
    return CheckoutService(
        registry=attempt_registry,
        cart_factory=build_cart_store,
        orders=build_order_service(),
        gateway=build_payment_gateway(),
        verifier=build_transfer_verifier(),
        scheduler=scheduler,
        countdown_seconds=settings.CHECKOUT_COUNTDOWN_SECONDS,
        phone_digits=settings.CHECKOUT_PHONE_DIGITS,
        country_code=settings.CHECKOUT_PHONE_COUNTRY_CODE,
    )
