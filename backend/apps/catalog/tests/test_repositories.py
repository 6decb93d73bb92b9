import unittest

from apps.catalog.queries import ProductListQuery
from apps.catalog.repositories import ProductListingRepository


class RecordingGateway:
    def __init__(self, rows=None, total=0):
        self.rows = rows or []
        self.total = total
        self.statements = []

    def query_rows(self, sql, params=()):
        self.statements.append(("rows", sql, tuple(params)))
        return list(self.rows)

    def query_one(self, sql, params=()):
        self.statements.append(("one", sql, tuple(params)))
        return {"total": self.total}

    def random_function_sql(self):
        return "RANDOM()"


class ProductListingRepositoryTests(unittest.TestCase):
    def test_fetch_page_runs_data_then_count(self):
        gateway = RecordingGateway(rows=[{"id": 1}], total=7)
        repo = ProductListingRepository(gateway)
        rows, total = repo.fetch_page(ProductListQuery(page=2, limit=3, category_id=4))
        self.assertEqual(rows, [{"id": 1}])
        self.assertEqual(total, 7)
        (kind1, data_sql, data_params), (kind2, count_sql, count_params) = gateway.statements
        self.assertEqual((kind1, kind2), ("rows", "one"))
        self.assertIn("LIMIT %s OFFSET %s", data_sql)
        self.assertEqual(data_params, (4, 3, 3))
        self.assertTrue(count_sql.startswith("SELECT COUNT(*) AS total"))
        self.assertEqual(count_params, (4,))

    def test_total_defaults_to_zero_when_count_is_missing(self):
        gateway = RecordingGateway()
        gateway.query_one = lambda sql, params=(): None
        _, total = ProductListingRepository(gateway).fetch_page(ProductListQuery())
        self.assertEqual(total, 0)

    def test_fetch_random_orders_with_dialect_function(self):
        gateway = RecordingGateway(rows=[{"id": 2}])
        rows = ProductListingRepository(gateway).fetch_random(
            ProductListQuery(limit=4, category_id=1, exclude_id=9)
        )
        self.assertEqual(rows, [{"id": 2}])
        (_, sql, params), = gateway.statements
        self.assertIn("ORDER BY RANDOM()", sql)
        self.assertEqual(params, (1, 9, 4, 0))
