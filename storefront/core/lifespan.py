# storefront/core/lifespan.py
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from storefront.db import memory, mongo, redis as r
from storefront.db.seed import seed_if_empty
from storefront.core.config import get_settings
from storefront.domain.repositories.cart_repo import CartRepo
from storefront.domain.repositories.product_repo import ProductRepo
from storefront.domain.repositories.user_repo import UserRepo
from storefront.utils.locks import UserLocks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    if settings.STORE_BACKEND == "mongo":
        await mongo.connect()
        db = mongo.get_db()
        products, users, carts = ProductRepo(db), UserRepo(db), CartRepo(db)
        try:
            for repo in (products, users, carts):
                await repo.ensure_indexes()
            if settings.SEED_CATALOG:
                await seed_if_empty(products, users)
        except Exception as e:
            # lazy client: requests will retry once Mongo is reachable
            logger.warning("Mongo bootstrap skipped: %s", e)
    else:
        memory.connect(seed=settings.SEED_CATALOG)
        logger.info("Using in-memory store")

    # Redis optional
    await r.connect()

    app.state.cart_locks = UserLocks(
        r.get_redis(), ttl=settings.cart_lock_ttl, wait=settings.cart_lock_wait
    )

    # Application runs
    yield

    # --- Shutdown ---
    try:
        await r.disconnect()
    except Exception as e:
        logger.warning("Redis disconnect failed: %s", e)

    if settings.STORE_BACKEND == "mongo":
        await mongo.disconnect()
        logger.info("Mongo disconnected")
    else:
        memory.disconnect()
