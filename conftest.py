import os
import sys

import pytest

# Make the Django project under backend/ importable when running `pytest` from the repo root
BASE_DIR = os.path.dirname(__file__)
BACKEND_DIR = os.path.join(BASE_DIR, 'backend')
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Product list cache and checkout attempts live in-process; reset them per test."""
    from django.core.cache import cache
    from apps.checkout.container import attempt_registry

    cache.clear()
    yield
    attempt_registry.clear()
