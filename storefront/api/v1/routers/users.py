# storefront/api/v1/routers/users.py
from fastapi import APIRouter, Depends
from typing import List
import time
import logging

from storefront.api.deps import product_repo, redis_dep, user_repo
from storefront.api.v1.schemas.users import PreferencesIn
from storefront.core.config import Settings, get_settings
from storefront.domain.models.product import Product
from storefront.domain.models.user import User
from storefront.domain.services.recommend_svc import recommend_svc
from storefront.domain.services.user_svc import get_user_svc, update_preferences_svc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, users = Depends(user_repo)):
    return await get_user_svc(users, user_id)


@router.put("/{user_id}/preferences", response_model=User)
async def update_preferences(user_id: str, body: PreferencesIn, users = Depends(user_repo)):
    logger.info("Request: update_preferences user_id=%s", user_id)
    return await update_preferences_svc(users, user_id, body.to_domain())


@router.get("/{user_id}/recommendations", response_model=List[Product])
async def recommendations(
    user_id: str,
    users = Depends(user_repo),
    products = Depends(product_repo),
    redis = Depends(redis_dep),
    settings: Settings = Depends(get_settings),
):
    """
    Up to 8 products within the user's price range, above the eco threshold
    of their eco preference, best eco score first.
    """
    logger.info("Request: recommendations user_id=%s", user_id)
    start_time = time.perf_counter()

    items = await recommend_svc(
        users,
        products,
        redis,
        user_id=user_id,
        limit=settings.recommend_limit,
        cache_prefix=settings.recommendation_cache_prefix,
        cache_ttl=settings.recommendation_cache_ttl,
    )

    logger.info(
        "Response: recommendations user_id=%s, count=%s, elapsed_time=%.4fs",
        user_id, len(items), time.perf_counter() - start_time,
    )
    return items
