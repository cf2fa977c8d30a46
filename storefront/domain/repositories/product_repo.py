# storefront/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Any, Dict, Optional, List, Sequence
from motor.motor_asyncio import AsyncIOMotorDatabase
from storefront.domain.models.product import Product
from storefront.domain.repositories.base import ProductFilter, store_errors


def to_mongo_query(filters: Optional[ProductFilter]) -> Dict[str, Any]:
    """
    Translate the repository filter dialect into a Mongo query:
      {"price": {"gte": 1, "lte": 9}} -> {"price": {"$gte": 1, "$lte": 9}}
    Equality on an array field ("tags") matches any element, like Mongo does.
    """
    query: Dict[str, Any] = {}
    for field, cond in (filters or {}).items():
        if isinstance(cond, dict):
            query[field] = {f"${op}": v for op, v in cond.items()}
        else:
            query[field] = cond
    return query


class ProductRepo:
    """
    Product repository backed by the 'products' collection.
    Documents are keyed by product_id; Mongo's _id is never exposed.
    Catalog order is insertion order, kept via a natural-order sort on _id.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def find(self, filters: Optional[ProductFilter] = None) -> List[Product]:
        with store_errors("products.find"):
            cursor = self.col.find(to_mongo_query(filters), {"_id": 0}).sort("_id", 1)
            return [Product.model_validate(doc) async for doc in cursor]

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        with store_errors("products.find_by_id"):
            doc = await self.col.find_one({"product_id": product_id}, {"_id": 0})
        return Product.model_validate(doc) if doc else None

    # Batch fetch used to hydrate cart lines
    async def find_many(self, product_ids: Sequence[str]) -> List[Product]:
        with store_errors("products.find_many"):
            cursor = self.col.find(
                {"product_id": {"$in": list(product_ids)}},
                {"_id": 0},
            )
            return [Product.model_validate(doc) async for doc in cursor]

    async def save(self, product: Product) -> Product:
        with store_errors("products.save"):
            await self.col.update_one(
                {"product_id": product.product_id},
                {"$set": product.model_dump()},
                upsert=True,
            )
        return product

    async def count(self) -> int:
        with store_errors("products.count"):
            return await self.col.count_documents({})

    async def ensure_indexes(self) -> None:
        with store_errors("products.ensure_indexes"):
            await self.col.create_index("product_id", unique=True)
            await self.col.create_index("category")
