# storefront/domain/repositories/cart_repo.py
from __future__ import annotations
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError
from storefront.core.errors import CartConflict
from storefront.domain.models.cart import Cart
from storefront.domain.repositories.base import store_errors


class CartRepo:
    """
    Carts in the 'carts' collection, one document per user:
      { user_id, items: [{item_id, product_id, quantity, price_at_addition}],
        discount, coupon_code, version }
    save() is a compare-and-swap on `version`; a miss means another request
    wrote the cart first and surfaces as CartConflict.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "carts"):
        self.col = db[collection_name]

    async def find_by_user(self, user_id: str) -> Optional[Cart]:
        with store_errors("carts.find_by_user"):
            doc = await self.col.find_one({"user_id": user_id}, {"_id": 0})
        return Cart.model_validate(doc) if doc else None

    async def save(self, cart: Cart) -> Cart:
        doc = cart.model_dump()
        doc["version"] = cart.version + 1

        with store_errors("carts.save"):
            if cart.version == 0:
                try:
                    await self.col.insert_one(dict(doc))
                except DuplicateKeyError as e:
                    # another request created the cart first
                    raise CartConflict(cart.user_id, cart.version) from e
            else:
                res = await self.col.replace_one(
                    {"user_id": cart.user_id, "version": cart.version},
                    doc,
                )
                if res.matched_count == 0:
                    raise CartConflict(cart.user_id, cart.version)

        return Cart.model_validate(doc)

    async def delete_child(self, user_id: str, item_id: str) -> bool:
        with store_errors("carts.delete_child"):
            res = await self.col.update_one(
                {"user_id": user_id, "items.item_id": item_id},
                {"$pull": {"items": {"item_id": item_id}}, "$inc": {"version": 1}},
            )
        return res.modified_count > 0

    async def ensure_indexes(self) -> None:
        with store_errors("carts.ensure_indexes"):
            await self.col.create_index("user_id", unique=True)
