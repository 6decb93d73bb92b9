from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from .exceptions import ValidationError
from .pagination import DEFAULT_PAGE, MAX_PAGE, clamp_limit, clamp_page, offset_for, parse_int

DEFAULT_LIMIT = 12
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "DESC"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def _clean_str(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _positive_int(raw: Any) -> Optional[int]:
    value = parse_int(raw)
    return value if value is not None and value > 0 else None


def _non_negative_decimal(raw: Any) -> Optional[Decimal]:
    text = _clean_str(raw)
    if text is None:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return value


def _parse_bool(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    text = _clean_str(raw)
    if text is None:
        return None
    lowered = text.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass(frozen=True)
class ProductListQuery:
    """
    Typed product listing request.

    ``from_raw`` is the lenient entry point used for querystrings: anything it
    cannot parse becomes "no filter" or the pagination default. Constructing
    the dataclass directly is strict about pagination, so a caller that
    bypasses parsing cannot hand the query layer a zero or negative page size.
    Sorting stays as given; the query builder resolves it against its
    allow-list.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    category_id: Optional[int] = None
    seller_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    country_of_origin: Optional[str] = None
    featured: Optional[bool] = None
    search: Optional[str] = None
    exclude_id: Optional[int] = None
    sort_by: Optional[str] = DEFAULT_SORT_BY
    sort_order: Optional[str] = DEFAULT_SORT_ORDER

    def __post_init__(self):
        errors: Dict[str, str] = {}
        for name in ("page", "limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                errors[name] = "must be a positive integer"
        if "page" not in errors and self.page > MAX_PAGE:
            errors["page"] = f"must not exceed {MAX_PAGE}"
        if errors:
            raise ValidationError(
                "Invalid pagination parameters",
                details=errors,
                hint=f"page runs from 1 to {MAX_PAGE}; limit starts at 1.",
            )

    @property
    def offset(self) -> int:
        return offset_for(self.page, self.limit)

    @staticmethod
    def from_raw(
        params: Optional[Mapping[str, Any]],
        *,
        default_limit: Optional[int] = None,
        max_limit: Optional[int] = None,
    ) -> "ProductListQuery":
        data = params or {}
        return ProductListQuery(
            page=clamp_page(data.get("page")),
            limit=clamp_limit(data.get("limit"), default=default_limit, maximum=max_limit),
            category_id=_positive_int(data.get("category_id")),
            seller_id=_positive_int(data.get("seller_id")),
            min_price=_non_negative_decimal(data.get("min_price")),
            max_price=_non_negative_decimal(data.get("max_price")),
            country_of_origin=_clean_str(data.get("country_of_origin")),
            featured=_parse_bool(data.get("featured")),
            search=_clean_str(data.get("search")),
            exclude_id=_positive_int(data.get("exclude_id")),
            sort_by=_clean_str(data.get("sort_by")) or DEFAULT_SORT_BY,
            sort_order=_clean_str(data.get("sort_order")) or DEFAULT_SORT_ORDER,
        )

    def active_filters(self) -> Dict[str, Any]:
        """Filters that constrain the result, for logging."""
        skip = {"page", "limit", "sort_by", "sort_order"}
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in skip and getattr(self, f.name) is not None
        }
