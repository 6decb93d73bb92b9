"""
SQL construction for the product catalog listing.

Every filter value travels as a bound ``%s`` parameter; the only text spliced
into statements comes from the fixed tables below. The data query and the
count query share one predicate list so ``total`` always describes the same
set of rows that pagination walks through.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .queries import DEFAULT_SORT_BY, DEFAULT_SORT_ORDER, ProductListQuery

PRODUCTS_TABLE = "products"
CATEGORIES_TABLE = "categories"
USERS_TABLE = "users"
IMAGES_TABLE = "product_images"
REVIEWS_TABLE = "reviews"

# Public sort key -> ORDER BY expression. avg_rating is the derived column alias.
SORT_COLUMNS = {
    "created_at": "p.created_at",
    "price": "p.price",
    "name": "p.name",
    "avg_rating": "avg_rating",
}
SORT_ALIASES = {
    "createdDate": "created_at",
    "created_date": "created_at",
    "createdAt": "created_at",
    "avgRating": "avg_rating",
}
SORT_ORDERS = ("ASC", "DESC")

LIKE_ESCAPE = "\\"

_FROM_CLAUSE = (
    f"FROM {PRODUCTS_TABLE} p "
    f"JOIN {CATEGORIES_TABLE} c ON c.id = p.category_id "
    f"JOIN {USERS_TABLE} u ON u.id = p.seller_id"
)

_SUMMARY_COLUMNS = (
    "p.id AS id, p.name AS name, p.description AS description, p.price AS price, "
    "p.category_id AS category_id, c.name AS category_name, "
    "p.seller_id AS seller_id, u.username AS seller_name, "
    "p.country_of_origin AS country_of_origin, p.featured AS featured, "
    "p.stock_quantity AS stock_quantity, p.discount AS discount, "
    "p.created_at AS created_at, "
    f"(SELECT pi.image_path FROM {IMAGES_TABLE} pi "
    "WHERE pi.product_id = p.id AND pi.is_primary = TRUE "
    "ORDER BY pi.id LIMIT 1) AS primary_image, "
    f"(SELECT AVG(r.rating) FROM {REVIEWS_TABLE} r WHERE r.product_id = p.id) AS avg_rating, "
    f"(SELECT COUNT(*) FROM {REVIEWS_TABLE} rc WHERE rc.product_id = p.id) AS review_count"
)


@dataclass(frozen=True)
class Predicate:
    fragment: str
    params: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class BuiltQuery:
    sql: str
    params: Tuple[Any, ...]


@dataclass(frozen=True)
class CatalogQuery:
    data: BuiltQuery
    count: BuiltQuery
    sort_by: str
    sort_order: str


def resolve_sort_by(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_SORT_BY
    key = SORT_ALIASES.get(value, value)
    return key if key in SORT_COLUMNS else DEFAULT_SORT_BY


def resolve_sort_order(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_SORT_ORDER
    upper = value.strip().upper()
    return upper if upper in SORT_ORDERS else DEFAULT_SORT_ORDER


def escape_like(term: str) -> str:
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class CatalogQueryBuilder:
    def __init__(self, query: ProductListQuery):
        self.query = query

    def predicates(self) -> List[Predicate]:
        q = self.query
        out: List[Predicate] = []
        if q.category_id is not None:
            out.append(Predicate("p.category_id = %s", (q.category_id,)))
        if q.seller_id is not None:
            out.append(Predicate("p.seller_id = %s", (q.seller_id,)))
        if q.min_price is not None:
            out.append(Predicate("p.price >= %s", (q.min_price,)))
        if q.max_price is not None:
            out.append(Predicate("p.price <= %s", (q.max_price,)))
        if q.country_of_origin is not None:
            out.append(Predicate("p.country_of_origin = %s", (q.country_of_origin,)))
        if q.featured is not None:
            out.append(Predicate("p.featured = %s", (bool(q.featured),)))
        if q.search:
            # Both sides fold through the database LOWER(). SQLite only folds ASCII there.
            pattern = f"%{escape_like(q.search)}%"
            like = f"LIKE LOWER(%s) ESCAPE '{LIKE_ESCAPE}'"
            out.append(
                Predicate(
                    f"(LOWER(p.name) {like} OR LOWER(p.description) {like} "
                    f"OR LOWER(c.name) {like})",
                    (pattern, pattern, pattern),
                )
            )
        if q.exclude_id is not None:
            out.append(Predicate("p.id <> %s", (q.exclude_id,)))
        return out

    def where(self) -> Tuple[str, Tuple[Any, ...]]:
        preds = self.predicates()
        if not preds:
            return "", ()
        clause = " WHERE " + " AND ".join(p.fragment for p in preds)
        params: Tuple[Any, ...] = tuple(v for p in preds for v in p.params)
        return clause, params

    def order_by(self, *, random_function: Optional[str] = None) -> str:
        if random_function:
            return f" ORDER BY {random_function}"
        sort_by = resolve_sort_by(self.query.sort_by)
        order = resolve_sort_order(self.query.sort_order)
        column = SORT_COLUMNS[sort_by]
        if sort_by == "avg_rating":
            # Unreviewed products rank lowest in either direction.
            nulls = "NULLS LAST" if order == "DESC" else "NULLS FIRST"
            column = f"{column} {order} {nulls}"
        else:
            column = f"{column} {order}"
        # p.id keeps pages stable when the sort column has ties.
        return f" ORDER BY {column}, p.id {order}"

    def data_query(self, *, random_function: Optional[str] = None) -> BuiltQuery:
        where, params = self.where()
        sql = (
            f"SELECT {_SUMMARY_COLUMNS} {_FROM_CLAUSE}{where}"
            f"{self.order_by(random_function=random_function)} LIMIT %s OFFSET %s"
        )
        return BuiltQuery(sql, params + (self.query.limit, self.query.offset))

    def count_query(self) -> BuiltQuery:
        where, params = self.where()
        return BuiltQuery(f"SELECT COUNT(*) AS total {_FROM_CLAUSE}{where}", params)

    def build(self) -> CatalogQuery:
        return CatalogQuery(
            data=self.data_query(),
            count=self.count_query(),
            sort_by=resolve_sort_by(self.query.sort_by),
            sort_order=resolve_sort_order(self.query.sort_order),
        )
