# storefront/domain/repositories/base.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Protocol, Sequence

from pymongo.errors import PyMongoError

from storefront.core.errors import StoreUnavailable
from storefront.domain.models.cart import Cart
from storefront.domain.models.product import Product
from storefront.domain.models.user import Preferences, User

"""
Repository contracts shared by the in-memory and Mongo backends.
Filters are plain equality/range dicts, e.g.
    {"category": "electronics", "price": {"gte": 10, "lte": 50}, "tags": "eco"}
"""

ProductFilter = Mapping[str, Any]


class ProductRepository(Protocol):
    async def find(self, filters: Optional[ProductFilter] = None) -> List[Product]: ...
    async def find_by_id(self, product_id: str) -> Optional[Product]: ...
    async def find_many(self, product_ids: Sequence[str]) -> List[Product]: ...
    async def save(self, product: Product) -> Product: ...
    async def count(self) -> int: ...


class UserRepository(Protocol):
    async def find_by_id(self, user_id: str) -> Optional[User]: ...
    async def save(self, user: User) -> User: ...
    async def update_preferences(self, user_id: str, preferences: Preferences) -> Optional[User]: ...


class CartRepository(Protocol):
    async def find_by_user(self, user_id: str) -> Optional[Cart]: ...
    async def save(self, cart: Cart) -> Cart: ...
    async def delete_child(self, user_id: str, item_id: str) -> bool: ...


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate driver failures into StoreUnavailable. No retry here."""
    try:
        yield
    except PyMongoError as e:
        raise StoreUnavailable(operation, e) from e
