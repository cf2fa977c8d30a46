import logging
from typing import Dict, List, Optional, Sequence

from storefront.core.errors import ValidationError
from storefront.domain.models.product import Product
from storefront.domain.services.constants import NAME_MATCH_SCORES, TAG_MATCH_SCORES

logger = logging.getLogger(__name__)


def score_product(product: Product, label: str) -> float:
    """
    Substring heuristic, not a model:
      tag_match  = 0.8 if any tag contains the label else 0.2
      name_match = 0.9 if the name contains the label else 0.1
      score      = mean of both
    Matching is case-insensitive.
    """
    needle = label.lower()
    tag_hit, tag_miss = TAG_MATCH_SCORES
    name_hit, name_miss = NAME_MATCH_SCORES
    tag_match = tag_hit if any(needle in t.lower() for t in product.tags) else tag_miss
    name_match = name_hit if needle in product.name.lower() else name_miss
    return (tag_match + name_match) / 2


def classify_products(products: Sequence[Product], categories: Sequence[str]) -> List[Dict]:
    if not categories:
        raise ValidationError("categories must contain at least one label", field="categories")
    return [
        {"product": p.name, "scores": {c: score_product(p, c) for c in categories}}
        for p in products
    ]


async def classify_svc(products, categories: Sequence[str], text: Optional[str] = None) -> List[Dict]:
    # `text` is accepted for compatibility with older clients and ignored
    catalog = await products.find()
    results = classify_products(catalog, categories)
    logger.info("classify done products=%s categories=%s", len(results), list(categories))
    return results
