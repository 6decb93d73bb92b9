import unittest

from django.test import override_settings

from apps.catalog.pagination import (
    MAX_PAGE,
    clamp_limit,
    clamp_page,
    offset_for,
    page_count,
    parse_int,
)


class ParseIntTests(unittest.TestCase):
    def test_accepts_ints_and_numeric_strings(self):
        self.assertEqual(parse_int(5), 5)
        self.assertEqual(parse_int(" 12 "), 12)
        self.assertEqual(parse_int("-3"), -3)

    def test_rejects_junk(self):
        for raw in (None, "", "abc", "1.5", True, False):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_int(raw))


class ClampTests(unittest.TestCase):
    def test_clamp_page(self):
        self.assertEqual(clamp_page(None), 1)
        self.assertEqual(clamp_page("0"), 1)
        self.assertEqual(clamp_page("7"), 7)

    def test_clamp_page_caps_huge_pages(self):
        self.assertEqual(clamp_page(str(MAX_PAGE + 5)), MAX_PAGE)
        self.assertEqual(clamp_page("99999999999999999999"), MAX_PAGE)
        self.assertEqual(clamp_page(10**30), MAX_PAGE)

    def test_clamp_limit_uses_explicit_bounds(self):
        self.assertEqual(clamp_limit(None, default=4, maximum=50), 4)
        self.assertEqual(clamp_limit("0", default=4, maximum=50), 1)
        self.assertEqual(clamp_limit("80", default=4, maximum=50), 50)

    def test_default_never_exceeds_maximum(self):
        self.assertEqual(clamp_limit("junk", default=40, maximum=10), 10)

    @override_settings(CATALOG_DEFAULT_LIMIT=8, CATALOG_MAX_LIMIT=30)
    def test_bounds_come_from_settings(self):
        self.assertEqual(clamp_limit(None), 8)
        self.assertEqual(clamp_limit("500"), 30)


class PageMathTests(unittest.TestCase):
    def test_page_count_rounds_up(self):
        self.assertEqual(page_count(25, 10), 3)
        self.assertEqual(page_count(20, 10), 2)
        self.assertEqual(page_count(1, 100), 1)

    def test_page_count_is_zero_for_empty_results(self):
        self.assertEqual(page_count(0, 10), 0)

    def test_page_count_rejects_non_positive_limit(self):
        with self.assertRaises(ValueError):
            page_count(5, 0)

    def test_offset_for(self):
        self.assertEqual(offset_for(1, 10), 0)
        self.assertEqual(offset_for(3, 10), 20)
