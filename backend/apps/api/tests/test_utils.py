import unittest
from rest_framework import status
from apps.api.utils import error_response, not_found


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

    def test_error_response_supports_hint_and_extra(self):
        resp = error_response(
            "VALIDATION_ERROR",
            "Invalid value",
            hint="Use a whole number",
            extra={"field": "limit"},
        )
        payload = resp.data["error"]
        self.assertEqual(payload["hint"], "Use a whole number")
        self.assertEqual(payload["extra"], {"field": "limit"})

    def test_code_is_normalised(self):
        resp = error_response(" not_found ", "missing")
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_unknown_code_defaults_to_bad_request(self):
        resp = error_response("SOMETHING_ODD", "odd")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rejects_empty_code_or_message(self):
        with self.assertRaises(ValueError):
            error_response("", "msg")
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "  ")

    def test_rejects_non_mapping_extra(self):
        with self.assertRaises(TypeError):
            error_response("NOT_FOUND", "missing", extra=["x"])


class NotFoundTests(unittest.TestCase):
    def test_not_found_names_resource_and_id(self):
        resp = not_found("Product", 42)
        payload = resp.data["error"]
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(payload["message"], "Product not found")
        self.assertEqual(payload["details"], {"id": "42"})
