from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from .models import Category, Product, ProductImage, Review
from .queries import ProductListQuery


class RowGatewayProtocol(Protocol):
    def query_rows(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        ...

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        ...

    def random_function_sql(self) -> str:
        ...


class ProductListingRepositoryProtocol(Protocol):
    def fetch_page(self, query: ProductListQuery) -> Tuple[List[Dict[str, Any]], int]:
        ...

    def fetch_random(self, query: ProductListQuery) -> List[Dict[str, Any]]:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Product]:
        ...

    def get_with_relations(self, product_id: int) -> Optional[Product]:
        ...

    def images_for(self, product: Product) -> Iterable[ProductImage]:
        ...

    def reviews_for(self, product: Product) -> Iterable[Review]:
        ...


class ReviewRepositoryProtocol(Protocol):
    def page_for_product(self, product_id: int, offset: int, limit: int) -> Iterable[Review]:
        ...

    def count(self, **filters) -> int:
        ...


class CategoryRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable[Category]:
        ...

    def get(self, **filters) -> Optional[Category]:
        ...
