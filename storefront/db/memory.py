# storefront/db/memory.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict
import logging

from storefront.domain.models.cart import Cart
from storefront.domain.models.product import Product
from storefront.domain.models.user import User
from storefront.db.seed import SAMPLE_PRODUCTS, SAMPLE_USERS

logger = logging.getLogger(__name__)


@dataclass
class MemoryStore:
    """
    Process-local collections. Dict insertion order is the catalog order.
    Used as the default backend and by the test-suite.
    """
    products: Dict[str, Product] = field(default_factory=dict)
    users: Dict[str, User] = field(default_factory=dict)
    carts: Dict[str, Cart] = field(default_factory=dict)


_store: MemoryStore | None = None


def get_store() -> MemoryStore:
    assert _store is not None, "Memory store not initialized"
    return _store


def connect(seed: bool = True) -> MemoryStore:
    """Create a fresh store, optionally loaded with the sample catalog."""
    global _store
    _store = MemoryStore()
    if seed:
        for p in SAMPLE_PRODUCTS:
            _store.products[p.product_id] = p
        for u in SAMPLE_USERS:
            _store.users[u.user_id] = u.model_copy(deep=True)
        logger.info("memory store seeded products=%s users=%s", len(_store.products), len(_store.users))
    return _store


def disconnect() -> None:
    global _store
    _store = None
