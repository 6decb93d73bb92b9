from __future__ import annotations

from typing import Optional

from apps.common.db import SQLGateway
from .protocols import RowGatewayProtocol
from .repositories import (
    CategoryRepository,
    ProductListingRepository,
    ProductRepository,
    ReviewRepository,
)
from .services import CategoryService, ProductService


def build_product_service(*, gateway: Optional[RowGatewayProtocol] = None) -> ProductService:
    return ProductService(
        listings=ProductListingRepository(gateway or SQLGateway()),
        products=ProductRepository(),
        reviews=ReviewRepository(),
    )


def build_category_service(*, gateway: Optional[RowGatewayProtocol] = None) -> CategoryService:
    return CategoryService(
        categories=CategoryRepository(),
        listings=ProductListingRepository(gateway or SQLGateway()),
    )
