from typing import Any, Optional

from django.conf import settings

DEFAULT_PAGE = 1
# Keeps (page - 1) * limit far inside a signed 64-bit OFFSET for any sane limit.
MAX_PAGE = 1_000_000


def default_limit() -> int:
    return max(1, int(getattr(settings, "CATALOG_DEFAULT_LIMIT", 12)))


def max_limit() -> int:
    return max(1, int(getattr(settings, "CATALOG_MAX_LIMIT", 100)))


def parse_int(raw: Any) -> Optional[int]:
    """Parse querystring integers; booleans, floats with fractions and junk give ``None``."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def clamp_page(raw: Any) -> int:
    """Missing or non-numeric pages give page 1; numeric ones are held to [1, MAX_PAGE]."""
    value = parse_int(raw)
    if value is None:
        return DEFAULT_PAGE
    return min(max(DEFAULT_PAGE, value), MAX_PAGE)


def clamp_limit(raw: Any, *, default: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """Missing or non-numeric limits fall back to ``default``; numeric ones are held to [1, maximum]."""
    fallback = default if default is not None else default_limit()
    ceiling = maximum if maximum is not None else max_limit()
    value = parse_int(raw)
    if value is None:
        return min(fallback, ceiling)
    return min(max(1, value), ceiling)


def page_count(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    if limit < 1:
        raise ValueError("limit must be a positive integer")
    return -(-total // limit)


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit
