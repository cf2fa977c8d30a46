import logging
import time
from typing import List, Optional

from storefront.core.errors import NotFound, ValidationError
from storefront.domain.models.product import Product
from storefront.domain.repositories.reco_cache_repo import RecoCacheRepo
from storefront.domain.services.constants import RECOMMEND_LIMIT
from storefront.domain.services.filters import preference_filter, rank_by_eco

logger = logging.getLogger(__name__)


async def recommend_svc(
    users,
    products,
    redis=None,
    *,
    user_id: str,
    limit: int = RECOMMEND_LIMIT,
    cache_prefix: str = "reco",
    cache_ttl: int = 600,
) -> List[Product]:
    """
    Preference-driven recommendations for one user.

    High-level flow:
      1) Load the user (NotFound if missing) and its price range (required).
      2) Try the Redis cache keyed by user + preferences hash.
      3) Keep products priced within [lo, hi] (inclusive).
      4) Apply the eco threshold: high -> >= 8, medium -> >= 5, else none.
      5) Stable sort by eco_score desc, truncate to `limit`, cache.
    The `style` preference is carried on the user but not used for ranking.
    """
    t0 = time.perf_counter()
    logger.info("recommend start user_id=%s limit=%s", user_id, limit)

    user = await users.find_by_id(user_id)
    if user is None:
        raise NotFound("user", user_id)

    prefs = user.preferences
    if prefs.price_range is None:
        raise ValidationError("user preferences have no price_range", field="price_range", user_id=user_id)

    cache: Optional[RecoCacheRepo] = RecoCacheRepo(redis, cache_prefix) if redis is not None else None
    key = cache.key(user_id, prefs, limit) if cache else None

    if cache:
        try:
            cached = await cache.get(key)
        except Exception as e:
            logger.warning("recommend redis.get error key=%s err=%s", key, e)
            cached = None
        if cached is not None:
            logger.info("recommend cache_hit key=%s items=%s", key, len(cached))
            return cached
        logger.info("recommend cache_miss key=%s", key)

    candidates = await products.find()
    kept = preference_filter(candidates, prefs.price_range, prefs.eco_preference)
    items = rank_by_eco(kept, limit)
    logger.debug(
        "recommend filtered catalog=%s kept=%s eco_preference=%s price_range=%s",
        len(candidates), len(kept), prefs.eco_preference, prefs.price_range,
    )

    if cache:
        try:
            await cache.set(key, items, ttl=cache_ttl)
        except Exception as e:
            logger.warning("recommend redis.set error key=%s err=%s", key, e)

    logger.info("recommend done user_id=%s items=%s total_time=%.3fs", user_id, len(items), time.perf_counter() - t0)
    return items
