from typing import Optional, Iterable
from storefront.domain.models.product import Product
from storefront.domain.models.user import Preferences
import hashlib
import json

def _h(preferences: Preferences, limit: int) -> str:
    """
    Short hash of the preferences and limit.
    A preference update produces a new key, so stale entries simply expire.
    """
    s = json.dumps({"p": preferences.model_dump(mode="json"), "k": limit}, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(s.encode()).hexdigest()[:10]

class RecoCacheRepo:
    """
    Adapter for caching recommended products in Redis (or any cache backend).
    Stores and retrieves lists of Product objects.
    """
    def __init__(self, redis, key_prefix: str):
        """
        Args:
            redis: Redis client instance
            key_prefix: Prefix for cache keys (e.g., 'reco')
        """
        self.cache = redis
        self.prefix = key_prefix

    def key(self, user_id: str, preferences: Preferences, limit: int) -> str:
        return f"{self.prefix}:{user_id}:{_h(preferences, limit)}"

    async def get(self, key: str) -> Optional[list[Product]]:
        """
        Retrieve a list of Product from cache by key.
        Returns None if not found.
        """
        raw = await self.cache.get(key)
        if raw:
            data = json.loads(raw)
            return [Product.model_validate(x) for x in data]
        return None

    async def set(self, key: str, items: Iterable[Product], ttl: int) -> None:
        payload = [i.model_dump() for i in items]
        await self.cache.set(key, json.dumps(payload), ex=ttl)
