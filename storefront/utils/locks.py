# storefront/utils/locks.py
from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional
from redis.asyncio import Redis
from redis.exceptions import LockError, RedisError
import asyncio, logging

from storefront.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class UserLocks:
    """
    One exclusive section per user id.
    With Redis the section spans workers (redis-py Lock: SET NX PX on
    acquire, token-checked Lua script on release). Without it an
    asyncio.Lock per user serializes requests inside this process only.
    """
    def __init__(self, redis: Optional[Redis] = None, ttl: int = 10, wait: float = 5):
        self.redis = redis
        self.ttl = ttl
        self.wait = wait
        self._local: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}  # holders + waiters per user id

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        if self.redis is None:
            async with self._hold_local(user_id):
                yield
            return

        lock = self.redis.lock(f"lock:cart:{user_id}", timeout=self.ttl, blocking_timeout=self.wait)
        try:
            acquired = await lock.acquire()
        except RedisError as e:
            raise StoreUnavailable("cart lock", e) from e
        if not acquired:
            logger.warning("cart lock busy user_id=%s waited=%ss", user_id, self.wait)
            raise StoreUnavailable("cart lock")
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError as e:
                # expired while held; someone else may own the key now
                logger.warning("cart lock lost before release user_id=%s err=%s", user_id, e)
            except RedisError as e:
                # TTL expiry frees the key anyway
                logger.warning("cart lock release failed user_id=%s err=%s", user_id, e)

    @asynccontextmanager
    async def _hold_local(self, user_id: str) -> AsyncIterator[None]:
        lock = self._local.setdefault(user_id, asyncio.Lock())
        self._users[user_id] = self._users.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            # drop the lock once nobody holds or waits for it
            self._users[user_id] -= 1
            if self._users[user_id] == 0:
                del self._users[user_id]
                del self._local[user_id]
