from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from statistics import fmean
from typing import Any, Iterable, List, Mapping, Optional

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .dtos import (
    CategoryDTO,
    ProductDetailDTO,
    ProductImageDTO,
    ProductSummaryDTO,
    ReviewDTO,
)
from .models import Category, Product, ProductImage, Review

_CENTS = Decimal("0.01")


def _money(value: Any) -> str:
    if value is None:
        value = 0
    return str(Decimal(str(value)).quantize(_CENTS))


def _optional_money(value: Any) -> Optional[str]:
    return None if value is None else _money(value)


def _timestamp(value: Any) -> Optional[str]:
    # Raw cursors hand back datetimes, naive datetimes (SQLite) or strings.
    if value is None:
        return None
    if isinstance(value, str):
        parsed = parse_datetime(value)
        if parsed is None:
            return value
        value = parsed
    if isinstance(value, datetime):
        if settings.USE_TZ and timezone.is_naive(value):
            value = timezone.make_aware(value, dt_timezone.utc)
        return value.isoformat()
    return str(value)


def _date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _rating(value: Any, review_count: int) -> Optional[float]:
    if value is None or not review_count:
        return None
    return round(float(value), 2)


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(id=cat.id, name=cat.name, description=cat.description)

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]


class ReviewMapper:
    @staticmethod
    def to_dto(review: Review) -> ReviewDTO:
        user = review.user
        return ReviewDTO(
            id=review.id,
            rating=review.rating,
            title=review.title,
            content=review.content,
            user_id=review.user_id,
            user_name=user.username,
            profile_image=user.profile_image,
            created_at=_timestamp(review.created_at),
        )

    @staticmethod
    def many_to_dto(reviews: Iterable[Review]) -> List[ReviewDTO]:
        return [ReviewMapper.to_dto(r) for r in reviews]


class ProductMapper:
    @staticmethod
    def row_to_summary(row: Mapping[str, Any]) -> ProductSummaryDTO:
        review_count = int(row.get("review_count") or 0)
        return ProductSummaryDTO(
            id=int(row["id"]),
            name=row["name"],
            description=row.get("description") or "",
            price=_money(row.get("price")),
            category_id=int(row["category_id"]),
            category_name=row.get("category_name") or "",
            seller_id=int(row["seller_id"]),
            seller_name=row.get("seller_name") or "",
            country_of_origin=row.get("country_of_origin") or "",
            featured=bool(row.get("featured")),
            stock_quantity=int(row.get("stock_quantity") or 0),
            discount=_money(row.get("discount")),
            created_at=_timestamp(row.get("created_at")),
            primary_image=row.get("primary_image"),
            avg_rating=_rating(row.get("avg_rating"), review_count),
            review_count=review_count,
        )

    @staticmethod
    def rows_to_summaries(rows: Iterable[Mapping[str, Any]]) -> List[ProductSummaryDTO]:
        return [ProductMapper.row_to_summary(r) for r in rows]

    @staticmethod
    def to_detail(
        product: Product,
        images: Iterable[ProductImage],
        reviews: Iterable[Review],
    ) -> ProductDetailDTO:
        images = list(images)
        reviews = list(reviews)
        primary = next((img.image_path for img in images if img.is_primary), None)
        avg = fmean(r.rating for r in reviews) if reviews else None
        return ProductDetailDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=_money(product.price),
            category_id=product.category_id,
            category_name=product.category.name,
            seller_id=product.seller_id,
            seller_name=product.seller.username,
            country_of_origin=product.country_of_origin,
            featured=product.featured,
            stock_quantity=product.stock_quantity,
            discount=_money(product.discount),
            created_at=_timestamp(product.created_at),
            primary_image=primary,
            avg_rating=_rating(avg, len(reviews)),
            review_count=len(reviews),
            category_description=product.category.description,
            weight=_optional_money(product.weight),
            weight_unit=product.weight_unit,
            manufacture_date=_date(product.manufacture_date),
            expiry_date=_date(product.expiry_date),
            images=[
                ProductImageDTO(id=img.id, image_path=img.image_path, is_primary=img.is_primary)
                for img in images
            ],
            reviews=ReviewMapper.many_to_dto(reviews),
        )
