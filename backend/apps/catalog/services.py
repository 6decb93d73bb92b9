from __future__ import annotations

from typing import List, Optional

from apps.common import get_logger
from .dtos import (
    CategoryDTO,
    PaginationDTO,
    ProductDetailDTO,
    ProductListResultDTO,
    ProductSummaryDTO,
    ReviewPageDTO,
)
from .mappers import CategoryMapper, ProductMapper, ReviewMapper
from .pagination import offset_for, page_count
from .protocols import (
    CategoryRepositoryProtocol,
    ProductListingRepositoryProtocol,
    ProductRepositoryProtocol,
    ReviewRepositoryProtocol,
)
from .queries import ProductListQuery

logger = get_logger(__name__).bind(component="catalog", layer="service")


def _pagination(total: int, page: int, limit: int) -> PaginationDTO:
    return PaginationDTO(total=total, page=page, limit=limit, pages=page_count(total, limit))


class ProductService:
    def __init__(
        self,
        listings: ProductListingRepositoryProtocol,
        products: ProductRepositoryProtocol,
        reviews: ReviewRepositoryProtocol,
    ):
        self.listings = listings
        self.products = products
        self.reviews = reviews
        self.logger = logger.bind(service="ProductService")

    def list_products(self, query: ProductListQuery) -> ProductListResultDTO:
        self.logger.debug(
            "Listing products",
            page=query.page,
            limit=query.limit,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
            filters=query.active_filters(),
        )
        rows, total = self.listings.fetch_page(query)
        items = ProductMapper.rows_to_summaries(rows)
        return ProductListResultDTO(
            items=items, pagination=_pagination(total, query.page, query.limit)
        )

    def get_product(self, product_id: int) -> Optional[ProductDetailDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.get_with_relations(product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            return None
        return ProductMapper.to_detail(
            product,
            self.products.images_for(product),
            self.products.reviews_for(product),
        )

    def related_products(
        self, product_id: int, limit: int
    ) -> Optional[List[ProductSummaryDTO]]:
        product = self.products.get(id=product_id)
        if not product:
            self.logger.info("Related products requested for missing product", product_id=product_id)
            return None
        query = ProductListQuery(
            page=1,
            limit=limit,
            category_id=product.category_id,
            exclude_id=product.id,
        )
        rows = self.listings.fetch_random(query)
        self.logger.debug(
            "Returning related products", product_id=product_id, count=len(rows)
        )
        return ProductMapper.rows_to_summaries(rows)

    def list_reviews(
        self, product_id: int, page: int, limit: int
    ) -> Optional[ReviewPageDTO]:
        if not self.products.get(id=product_id):
            self.logger.info("Reviews requested for missing product", product_id=product_id)
            return None
        total = self.reviews.count(product_id=product_id)
        reviews = self.reviews.page_for_product(product_id, offset_for(page, limit), limit)
        return ReviewPageDTO(
            product_id=product_id,
            reviews=ReviewMapper.many_to_dto(reviews),
            pagination=_pagination(total, page, limit),
        )


class CategoryService:
    def __init__(
        self,
        categories: CategoryRepositoryProtocol,
        listings: ProductListingRepositoryProtocol,
    ):
        self.categories = categories
        self.listings = listings
        self.logger = logger.bind(service="CategoryService")

    def list_categories(self) -> List[CategoryDTO]:
        self.logger.debug("Listing categories")
        return CategoryMapper.many_to_dto(self.categories.list())

    def get_category(self, category_id: int) -> Optional[CategoryDTO]:
        c = self.categories.get(id=category_id)
        if not c:
            self.logger.info("Category not found", category_id=category_id)
        return CategoryMapper.to_dto(c) if c else None

    def list_category_products(
        self, category_id: int, page: int, limit: int
    ) -> Optional[ProductListResultDTO]:
        if not self.categories.get(id=category_id):
            self.logger.info("Category products requested for missing category", category_id=category_id)
            return None
        query = ProductListQuery(
            page=page,
            limit=limit,
            category_id=category_id,
            sort_by="name",
            sort_order="ASC",
        )
        rows, total = self.listings.fetch_page(query)
        return ProductListResultDTO(
            items=ProductMapper.rows_to_summaries(rows),
            pagination=_pagination(total, page, limit),
        )
