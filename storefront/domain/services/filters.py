from typing import Iterable, List, Optional, Tuple

from storefront.core.errors import ValidationError
from storefront.domain.models.product import Product
from storefront.domain.services.constants import ECO_THRESHOLDS


def eco_threshold(eco_preference: Optional[str]) -> Optional[float]:
    """
    Minimal eco_score for a preference: 'high' -> 8, 'medium' -> 5.
    Anything else ('low', unset, unknown) returns None = no eco filtering.
    """
    if eco_preference is None:
        return None
    return ECO_THRESHOLDS.get(eco_preference)


def price_filter(min_price: Optional[float], max_price: Optional[float]) -> Optional[dict]:
    """Inclusive price range in the repository filter dialect."""
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError(
            f"min_price ({min_price}) must not exceed max_price ({max_price})",
            field="min_price",
        )
    cond = {}
    if min_price is not None:
        cond["gte"] = min_price
    if max_price is not None:
        cond["lte"] = max_price
    return cond or None


def catalog_filters(
    category: Optional[str] = None,
    tag: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> dict:
    """Build the conjunction of the optional catalog filters."""
    filters = {}
    if category is not None:
        filters["category"] = category
    if tag is not None:
        filters["tags"] = tag
    price = price_filter(min_price, max_price)
    if price:
        filters["price"] = price
    return filters


def preference_filter(
    products: Iterable[Product],
    price_range: Tuple[float, float],
    eco_preference: Optional[str],
) -> List[Product]:
    """Keep products inside the price range (inclusive) and above the eco threshold."""
    lo, hi = price_range
    threshold = eco_threshold(eco_preference)
    kept = [p for p in products if lo <= p.price <= hi]
    if threshold is not None:
        kept = [p for p in kept if p.eco_score >= threshold]
    return kept


def rank_by_eco(products: Iterable[Product], limit: int) -> List[Product]:
    # sorted() is stable: equal eco scores keep catalog order
    return sorted(products, key=lambda p: p.eco_score, reverse=True)[:limit]
