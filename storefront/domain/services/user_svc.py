import logging

from storefront.core.errors import NotFound
from storefront.domain.models.user import Preferences, User

logger = logging.getLogger(__name__)


async def get_user_svc(users, user_id: str) -> User:
    user = await users.find_by_id(user_id)
    if user is None:
        raise NotFound("user", user_id)
    return user


async def update_preferences_svc(users, user_id: str, preferences: Preferences) -> User:
    """Replace the whole preferences record (no field-level merge)."""
    user = await users.update_preferences(user_id, preferences)
    if user is None:
        raise NotFound("user", user_id)
    logger.info(
        "preferences updated user_id=%s price_range=%s eco_preference=%s style=%s",
        user_id, preferences.price_range, preferences.eco_preference, preferences.style,
    )
    return user
