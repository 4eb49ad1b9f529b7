from django.conf import settings
from django.core.checks import Tags, Warning, register


@register(Tags.compatibility)
def single_worker_check(app_configs, **kwargs):
    """Checkout attempts are held in process memory; more workers split them."""
    workers = getattr(settings, "CHECKOUT_WORKER_PROCESSES", 1)
    if workers <= 1:
        return []
    return [
        Warning(
            f"Checkout state is process-local but {workers} worker processes are configured.",
            hint="Run one worker process, or pin /api/checkout/ to a single worker.",
            id="checkout.W001",
        )
    ]
