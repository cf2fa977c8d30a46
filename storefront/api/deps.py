# storefront/api/deps.py
from fastapi import Depends, Request
from storefront.core.config import Settings, get_settings
from storefront.db import memory, mongo
from storefront.db.redis import get_redis
from storefront.domain.repositories.cart_repo import CartRepo
from storefront.domain.repositories.memory_repo import InMemoryCartRepo, InMemoryProductRepo, InMemoryUserRepo
from storefront.domain.repositories.product_repo import ProductRepo
from storefront.domain.repositories.base import CartRepository, ProductRepository, UserRepository
from storefront.domain.repositories.user_repo import UserRepo
from storefront.utils.locks import UserLocks

# Repositories are picked per request from STORE_BACKEND so the services
# never know which engine they talk to.

def product_repo(settings: Settings = Depends(get_settings)) -> ProductRepository:
    if settings.STORE_BACKEND == "mongo":
        return ProductRepo(mongo.get_db())
    return InMemoryProductRepo(memory.get_store())


def user_repo(settings: Settings = Depends(get_settings)) -> UserRepository:
    if settings.STORE_BACKEND == "mongo":
        return UserRepo(mongo.get_db())
    return InMemoryUserRepo(memory.get_store())


def cart_repo(settings: Settings = Depends(get_settings)) -> CartRepository:
    if settings.STORE_BACKEND == "mongo":
        return CartRepo(mongo.get_db())
    return InMemoryCartRepo(memory.get_store())


def cart_locks(request: Request) -> UserLocks:
    return request.app.state.cart_locks


# Dependency for injecting the Redis client (None when not configured)
def redis_dep():
    return get_redis()
