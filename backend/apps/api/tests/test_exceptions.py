from django.http import Http404
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import ApplicationError, global_exception_handler

factory = APIRequestFactory()


class DummyView:
    pass


class OutOfStockError(ApplicationError):
    code = "CONFLICT"
    default_message = _("Out of stock")


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_structured_response():
    request = factory.post("/api/checkout/")
    exc = ApplicationError(
        "CONFLICT",
        "Payment already running",
        status_code=status.HTTP_409_CONFLICT,
        details={"state": "PROCESSING"},
    )
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_409_CONFLICT
    assert payload["code"] == "CONFLICT"
    assert payload["message"] == "Payment already running"
    assert payload["details"] == {"state": "PROCESSING"}


def test_subclass_defaults_fill_code_status_and_message():
    request = factory.post("/api/cart/items/")
    response = global_exception_handler(
        OutOfStockError(details={"productId": "1"}), _context(request)
    )
    payload = response.data["error"]
    assert response.status_code == status.HTTP_409_CONFLICT
    assert payload["code"] == "CONFLICT"
    assert payload["message"] == "Out of stock"
    assert payload["details"] == {"productId": "1"}


def test_validation_error_preserves_details():
    request = factory.post("/api/cart/items/", data={})
    exc = ValidationError({"productId": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"] == "Validation failed"
    assert payload["details"] == {"productId": ["This field is required."]}


def test_django_404_maps_to_not_found():
    request = factory.get("/api/orders/9/")
    response = global_exception_handler(Http404(), _context(request))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.data["error"]["code"] == "NOT_FOUND"


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/cart/")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert payload["message"] == "Something went wrong"
    assert "details" not in payload
