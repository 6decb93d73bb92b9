from typing import Any, Dict, Iterable, List, Optional, Tuple

from apps.common import get_logger
from apps.common.db import SQLGateway
from apps.common.repository import ReadRepository
from .models import Category, Product, ProductImage, Review
from .protocols import RowGatewayProtocol
from .queries import ProductListQuery
from .query_builder import CatalogQueryBuilder

logger = get_logger(__name__).bind(component="catalog", layer="repository")


class ProductListingRepository:
    """Runs builder-generated catalog statements through a row gateway."""

    def __init__(self, gateway: Optional[RowGatewayProtocol] = None):
        self.gateway = gateway or SQLGateway()

    def fetch_page(self, query: ProductListQuery) -> Tuple[List[Dict[str, Any]], int]:
        # Data and count run as two independent reads; no shared transaction.
        built = CatalogQueryBuilder(query).build()
        rows = self.gateway.query_rows(built.data.sql, built.data.params)
        count_row = self.gateway.query_one(built.count.sql, built.count.params)
        total = int(count_row["total"]) if count_row and count_row.get("total") is not None else 0
        logger.debug(
            "Fetched product page",
            sort_by=built.sort_by,
            sort_order=built.sort_order,
            rows=len(rows),
            total=total,
        )
        return rows, total

    def fetch_random(self, query: ProductListQuery) -> List[Dict[str, Any]]:
        built = CatalogQueryBuilder(query).data_query(
            random_function=self.gateway.random_function_sql()
        )
        return self.gateway.query_rows(built.sql, built.params)


class ProductRepository(ReadRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def get_with_relations(self, product_id: int) -> Optional[Product]:
        return (
            self.model.objects.select_related("category", "seller")
            .filter(id=product_id)
            .first()
        )

    def images_for(self, product: Product) -> Iterable[ProductImage]:
        return product.images.order_by("-is_primary", "id")

    def reviews_for(self, product: Product) -> Iterable[Review]:
        return product.reviews.select_related("user").order_by("-created_at", "-id")


class ReviewRepository(ReadRepository[Review]):
    def __init__(self):
        super().__init__(Review, ordering=("-created_at", "-id"))

    def page_for_product(self, product_id: int, offset: int, limit: int) -> Iterable[Review]:
        qs = self.queryset().filter(product_id=product_id).select_related("user")
        return qs[offset:offset + limit]


class CategoryRepository(ReadRepository[Category]):
    def __init__(self):
        super().__init__(Category, ordering=("name",))
