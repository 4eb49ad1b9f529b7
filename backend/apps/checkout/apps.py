from django.apps import AppConfig


class CheckoutConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.checkout"
    label = "checkout"

    def ready(self):
        from . import checks  # noqa: F401
