import logging
from typing import List

from storefront.core.errors import ValidationError
from storefront.domain.models.product import Product
from storefront.domain.services.constants import ASSISTANT_PICKS, ECO_HIGH, ECO_KEYWORDS
from storefront.domain.services.filters import eco_threshold, rank_by_eco

logger = logging.getLogger(__name__)

DEFAULT_REPLY = "I can help you with product recommendations, comparisons, and finding the best deals."


def _names(products: List[Product]) -> str:
    return ", ".join(p.name for p in products)


def _trending(catalog: List[Product]) -> List[Product]:
    # biggest markdown first; products without original_price count as 0
    def markdown(p: Product) -> float:
        return (p.original_price or p.price) - p.price
    return sorted(catalog, key=markdown, reverse=True)[:ASSISTANT_PICKS]


def build_reply(message: str, catalog: List[Product]) -> str:
    """Keyword dispatch: trending, then eco/sustainable, then budget."""
    text = message.lower()

    if "trending" in text:
        picks = _trending(catalog)
        if picks:
            return f"Here are some trending products right now: {_names(picks)}"

    elif any(k in text for k in ECO_KEYWORDS):
        threshold = eco_threshold(ECO_HIGH)
        picks = rank_by_eco([p for p in catalog if p.eco_score >= threshold], len(catalog))
        if picks:
            return f"I found these sustainable products for you: {_names(picks)}"

    elif "budget" in text:
        picks = sorted(catalog, key=lambda p: p.price)[:ASSISTANT_PICKS]
        if picks:
            listed = ", ".join(f"{p.name} (${p.price:g})" for p in picks)
            return f"Based on your preferences, I recommend these products in your budget: {listed}"

    return DEFAULT_REPLY


async def assistant_reply_svc(products, message: str) -> str:
    if not message or not message.strip():
        raise ValidationError("message must not be empty", field="message")
    catalog = await products.find()
    reply = build_reply(message, catalog)
    logger.info("assistant reply message_len=%s default=%s", len(message), reply == DEFAULT_REPLY)
    return reply
