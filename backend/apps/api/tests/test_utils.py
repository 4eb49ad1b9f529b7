import unittest

from django.utils.translation import gettext_lazy as _
from rest_framework import status

from apps.api.utils import error_response


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "missing", {"id": 1})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"id": 1})

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_lazy_messages_are_rendered_to_text(self):
        resp = error_response("VALIDATION_ERROR", _("Your cart is empty"))
        self.assertEqual(resp.data["error"]["message"], "Your cart is empty")
        self.assertIsInstance(resp.data["error"]["message"], str)

    def test_lazy_detail_values_are_rendered(self):
        resp = error_response("CONFLICT", "busy", {"reason": _("Unknown screen")})
        self.assertEqual(resp.data["error"]["details"], {"reason": "Unknown screen"})

    def test_bad_gateway_code_maps_to_502(self):
        resp = error_response("bad_gateway", "upstream down")
        self.assertEqual(resp.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(resp.data["error"]["code"], "BAD_GATEWAY")

    def test_error_response_supports_hint_and_extra(self):
        resp = error_response(
            "VALIDATION_ERROR",
            "Invalid value",
            hint="Use digits only",
            extra={"field": "destination"},
        )
        payload = resp.data["error"]
        self.assertEqual(payload["hint"], "Use digits only")
        self.assertEqual(payload["extra"], {"field": "destination"})

    def test_rejects_empty_message(self):
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "   ")
