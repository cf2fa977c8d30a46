"""Shared fixtures: in-memory store, repositories and a fake Redis."""

import pytest
from fastapi.testclient import TestClient

from storefront.db import memory
from storefront.db.memory import MemoryStore
from storefront.domain.models.user import Preferences, User
from storefront.domain.repositories.memory_repo import (
    InMemoryCartRepo,
    InMemoryProductRepo,
    InMemoryUserRepo,
)
from storefront.utils.locks import UserLocks

from fakes import FakeRedis


@pytest.fixture
def store():
    """Fresh store seeded with the sample catalog and the default user."""
    s = memory.connect(seed=True)
    yield s
    memory.disconnect()


@pytest.fixture
def empty_store():
    return MemoryStore()


@pytest.fixture
def products(store):
    return InMemoryProductRepo(store)


@pytest.fixture
def users(store):
    return InMemoryUserRepo(store)


@pytest.fixture
def carts(store):
    return InMemoryCartRepo(store)


@pytest.fixture
def locks():
    return UserLocks()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def add_user():
    """Put a user with the given preferences into a store."""
    def _add(store, user_id, price_range=(0, 500), eco_preference="high", style=None):
        store.users[user_id] = User(
            user_id=user_id,
            name=f"User {user_id}",
            preferences=Preferences(style=style, price_range=price_range, eco_preference=eco_preference),
        )
    return _add


@pytest.fixture
def client():
    """TestClient running the real lifespan (in-memory backend, no Redis)."""
    from storefront.main import app

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
