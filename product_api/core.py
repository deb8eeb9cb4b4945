# product_api/core.py
import math
from typing import Dict, List, Optional, Sequence

from .errors import ValidationError
from .models import CategoryStats, Product, ProductPage, SearchResult, Statistics

# Pure query functions over a snapshot taken from ProductStore.list().

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Coerce a query-string value to an int >= 1, or fall back to ``default``."""
    if raw is None:
        return default
    raw = raw.strip()
    # plain base-10 digits only: no signs, underscores or unicode digits
    if not (raw.isascii() and raw.isdigit()):
        return default
    try:
        value = int(raw)
    except ValueError:
        # longer than the interpreter's int conversion limit
        return default
    return value if value >= 1 else default


def parse_product_id(raw: str) -> Optional[int]:
    """Return the integer id of a path segment, or None if it isn't numeric."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    try:
        return int(raw)
    except ValueError:
        # longer than the interpreter's int conversion limit
        return None


def filter_by_category(products: Sequence[Product], category: Optional[str]) -> List[Product]:
    if not category:
        return list(products)
    wanted = category.lower()
    return [p for p in products if p.category.lower() == wanted]


def paginate(products: Sequence[Product], page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> ProductPage:
    total = len(products)
    start = (page - 1) * limit
    end = start + limit
    return ProductPage(
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
        data=list(products[start:end]),
    )


def list_products(products: Sequence[Product], category: Optional[str] = None,
                  page: Optional[str] = None, limit: Optional[str] = None) -> ProductPage:
    filtered = filter_by_category(products, category)
    return paginate(
        filtered,
        parse_positive_int(page, DEFAULT_PAGE),
        parse_positive_int(limit, DEFAULT_LIMIT),
    )


def search_products(products: Sequence[Product], name: Optional[str]) -> SearchResult:
    if not name:
        raise ValidationError("Search name parameter is required")
    term = name.lower()
    results = [p for p in products if term in p.name.lower()]
    return SearchResult(total=len(results), data=results)


def product_statistics(products: Sequence[Product]) -> Statistics:
    stats: Dict[str, CategoryStats] = {}
    for p in products:
        group = stats.setdefault(p.category, CategoryStats())
        group.count += 1
        group.total_value += p.price
        if p.in_stock:
            group.in_stock += 1
    return Statistics(total_products=len(products), category_counts=stats)
