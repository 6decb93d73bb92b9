import logging
import unittest

from apps.common.logger import AppLogger, get_logger


class AppLoggerTests(unittest.TestCase):
    def setUp(self):
        self.logger = get_logger("apps.tests.logger")

    def test_bind_merges_context_without_mutating_parent(self):
        child = self.logger.bind(component="catalog").bind(layer="service")
        self.assertEqual(child.context, {"component": "catalog", "layer": "service"})
        self.assertEqual(self.logger.context, {})
        self.assertEqual(child.name, "apps.tests.logger")

    def test_format_appends_key_values(self):
        text = AppLogger._format("Listing products", {"page": 2, "filters": {"featured": True}})
        self.assertEqual(text, "Listing products | page=2 filters={'featured': True}")

    def test_records_include_bound_context(self):
        bound = self.logger.bind(component="catalog")
        with self.assertLogs("apps.tests.logger", level="INFO") as captured:
            bound.info("Product not found", product_id=7)
        self.assertEqual(
            captured.records[0].getMessage(),
            "Product not found | component=catalog product_id=7",
        )

    def test_timed_reports_elapsed_and_extra_fields(self):
        with self.assertLogs("apps.tests.logger", level="DEBUG") as captured:
            with self.logger.timed("Fetched rows", level=logging.INFO, statement="SELECT") as out:
                out["rows"] = 3
        message = captured.records[0].getMessage()
        self.assertTrue(message.startswith("Fetched rows | statement=SELECT rows=3 elapsed_ms="))
