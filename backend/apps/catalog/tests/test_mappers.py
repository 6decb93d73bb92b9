import types
import unittest
from datetime import date, datetime, timezone
from decimal import Decimal

from apps.catalog.mappers import CategoryMapper, ProductMapper, ReviewMapper


def make_row(**overrides):
    row = {
        "id": 1,
        "name": "Puna Yam",
        "description": "Large tubers",
        "price": Decimal("4.2"),
        "category_id": 2,
        "category_name": "Tubers",
        "seller_id": 3,
        "seller_name": "ama_farms",
        "country_of_origin": "Ghana",
        "featured": 1,
        "stock_quantity": 30,
        "discount": Decimal("0"),
        "created_at": datetime(2024, 5, 1, 8, 30),
        "primary_image": "/images/1.jpg",
        "avg_rating": Decimal("4.3333"),
        "review_count": 3,
    }
    row.update(overrides)
    return row


def make_user(user_id=9, username="kofi_m", profile_image=None):
    return types.SimpleNamespace(id=user_id, username=username, profile_image=profile_image)


def make_review(review_id, rating, user=None, created_at=None):
    user = user or make_user()
    return types.SimpleNamespace(
        id=review_id,
        rating=rating,
        title=f"Review {review_id}",
        content="Fresh",
        user=user,
        user_id=user.id,
        created_at=created_at or datetime(2024, 6, 1, tzinfo=timezone.utc),
    )


class ProductMapperRowTests(unittest.TestCase):
    def test_row_to_summary_formats_values(self):
        dto = ProductMapper.row_to_summary(make_row())
        self.assertEqual(dto.price, "4.20")
        self.assertEqual(dto.discount, "0.00")
        self.assertIs(dto.featured, True)
        self.assertEqual(dto.avg_rating, 4.33)
        self.assertEqual(dto.review_count, 3)
        self.assertEqual(dto.created_at, "2024-05-01T08:30:00+00:00")
        self.assertEqual(dto.category_name, "Tubers")

    def test_unreviewed_product_has_null_rating(self):
        dto = ProductMapper.row_to_summary(make_row(avg_rating=None, review_count=0))
        self.assertIsNone(dto.avg_rating)
        self.assertEqual(dto.review_count, 0)

    def test_string_timestamps_are_normalised(self):
        dto = ProductMapper.row_to_summary(make_row(created_at="2024-05-01 08:30:00"))
        self.assertEqual(dto.created_at, "2024-05-01T08:30:00+00:00")

    def test_missing_image_stays_null(self):
        dto = ProductMapper.row_to_summary(make_row(primary_image=None))
        self.assertIsNone(dto.primary_image)

    def test_rows_to_summaries_keeps_order(self):
        dtos = ProductMapper.rows_to_summaries([make_row(id=5), make_row(id=2)])
        self.assertEqual([d.id for d in dtos], [5, 2])


class ProductMapperDetailTests(unittest.TestCase):
    def make_product(self):
        category = types.SimpleNamespace(id=2, name="Tubers", description="Roots")
        seller = types.SimpleNamespace(id=3, username="ama_farms")
        return types.SimpleNamespace(
            id=1,
            name="Puna Yam",
            description="Large tubers",
            price=Decimal("4.20"),
            category=category,
            category_id=2,
            seller=seller,
            seller_id=3,
            country_of_origin="Ghana",
            featured=False,
            stock_quantity=12,
            discount=Decimal("5"),
            weight=Decimal("2.5"),
            weight_unit="kg",
            manufacture_date=None,
            expiry_date=date(2025, 1, 31),
            created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        )

    def test_to_detail_aggregates_reviews_and_images(self):
        images = [
            types.SimpleNamespace(id=10, image_path="/a.jpg", is_primary=False),
            types.SimpleNamespace(id=11, image_path="/b.jpg", is_primary=True),
        ]
        reviews = [make_review(1, 5), make_review(2, 4), make_review(3, 4)]
        dto = ProductMapper.to_detail(self.make_product(), images, reviews)
        self.assertEqual(dto.primary_image, "/b.jpg")
        self.assertEqual(dto.avg_rating, 4.33)
        self.assertEqual(dto.review_count, 3)
        self.assertEqual(dto.category_description, "Roots")
        self.assertEqual(dto.weight, "2.50")
        self.assertEqual(dto.expiry_date, "2025-01-31")
        self.assertIsNone(dto.manufacture_date)
        self.assertEqual([img.id for img in dto.images], [10, 11])
        self.assertEqual([r.id for r in dto.reviews], [1, 2, 3])

    def test_to_detail_without_reviews(self):
        dto = ProductMapper.to_detail(self.make_product(), [], [])
        self.assertIsNone(dto.avg_rating)
        self.assertIsNone(dto.primary_image)
        self.assertEqual(dto.review_count, 0)


class ReviewAndCategoryMapperTests(unittest.TestCase):
    def test_review_carries_reviewer_fields(self):
        user = make_user(4, "chioma_e", "/avatars/4.png")
        dto = ReviewMapper.to_dto(make_review(7, 5, user=user))
        self.assertEqual(dto.user_id, 4)
        self.assertEqual(dto.user_name, "chioma_e")
        self.assertEqual(dto.profile_image, "/avatars/4.png")
        self.assertEqual(dto.created_at, "2024-06-01T00:00:00+00:00")

    def test_category_mapping(self):
        cats = [
            types.SimpleNamespace(id=1, name="Fruits", description=None),
            types.SimpleNamespace(id=2, name="Spices", description="Dried"),
        ]
        dtos = CategoryMapper.many_to_dto(cats)
        self.assertEqual([(c.id, c.name, c.description) for c in dtos], [
            (1, "Fruits", None),
            (2, "Spices", "Dried"),
        ])
