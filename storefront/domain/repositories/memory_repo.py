# storefront/domain/repositories/memory_repo.py
from __future__ import annotations
from typing import List, Optional, Sequence

from storefront.core.errors import CartConflict
from storefront.db.memory import MemoryStore
from storefront.domain.models.cart import Cart
from storefront.domain.models.product import Product
from storefront.domain.models.user import Preferences, User
from storefront.domain.repositories.base import ProductFilter


def _matches(product: Product, filters: ProductFilter) -> bool:
    """Evaluate the equality/range filter dialect against one product."""
    for field, cond in filters.items():
        value = getattr(product, field)
        if isinstance(cond, dict):
            if "gte" in cond and value < cond["gte"]:
                return False
            if "lte" in cond and value > cond["lte"]:
                return False
        elif isinstance(value, list):
            if cond not in value:
                return False
        elif value != cond:
            return False
    return True


class InMemoryProductRepo:
    def __init__(self, store: MemoryStore):
        self.store = store

    async def find(self, filters: Optional[ProductFilter] = None) -> List[Product]:
        products = list(self.store.products.values())
        if not filters:
            return products
        return [p for p in products if _matches(p, filters)]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        return self.store.products.get(product_id)

    async def find_many(self, product_ids: Sequence[str]) -> List[Product]:
        return [self.store.products[pid] for pid in dict.fromkeys(product_ids) if pid in self.store.products]

    async def save(self, product: Product) -> Product:
        # Product is frozen, sharing the instance is safe
        self.store.products[product.product_id] = product
        return product

    async def count(self) -> int:
        return len(self.store.products)


class InMemoryUserRepo:
    def __init__(self, store: MemoryStore):
        self.store = store

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user = self.store.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def save(self, user: User) -> User:
        self.store.users[user.user_id] = user.model_copy(deep=True)
        return user

    async def update_preferences(self, user_id: str, preferences: Preferences) -> Optional[User]:
        user = self.store.users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update={"preferences": preferences.model_copy()}, deep=True)
        self.store.users[user_id] = updated
        return updated.model_copy(deep=True)


class InMemoryCartRepo:
    """
    Carts keyed by user_id. Reads and writes copy the record so callers
    never mutate stored state outside save(); save() applies the same
    version check as the Mongo backend.
    """
    def __init__(self, store: MemoryStore):
        self.store = store

    async def find_by_user(self, user_id: str) -> Optional[Cart]:
        cart = self.store.carts.get(user_id)
        return cart.model_copy(deep=True) if cart else None

    async def save(self, cart: Cart) -> Cart:
        current = self.store.carts.get(cart.user_id)
        current_version = current.version if current else 0
        if current_version != cart.version:
            raise CartConflict(cart.user_id, cart.version)
        saved = cart.model_copy(update={"version": cart.version + 1}, deep=True)
        self.store.carts[cart.user_id] = saved
        return saved.model_copy(deep=True)

    async def delete_child(self, user_id: str, item_id: str) -> bool:
        cart = self.store.carts.get(user_id)
        if cart is None:
            return False
        remaining = [i for i in cart.items if i.item_id != item_id]
        if len(remaining) == len(cart.items):
            return False
        self.store.carts[user_id] = cart.model_copy(
            update={"items": remaining, "version": cart.version + 1}, deep=True
        )
        return True
