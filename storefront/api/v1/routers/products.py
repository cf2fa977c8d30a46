# storefront/api/v1/routers/products.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional
import time

from storefront.api.deps import product_repo
from storefront.domain.models.product import Product
from storefront.domain.services.catalog_svc import (
    get_all_products_svc,
    get_product_svc,
    get_products_by_category_svc,
    search_products_svc,
)

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products", response_model=List[Product])
async def list_products(
    category: Optional[str] = Query(None, description="Exact, case-sensitive category"),
    tag: Optional[str] = Query(None, description="Products carrying this tag"),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    products = Depends(product_repo),
):
    """
    Whole catalog in insertion order; optional filters are combined with AND.
    """
    t0 = time.perf_counter()
    if category is None and tag is None and min_price is None and max_price is None:
        items = await get_all_products_svc(products)
    else:
        items = await search_products_svc(products, category=category, tag=tag, min_price=min_price, max_price=max_price)
    logger.info(
        "Response: list_products count=%s category=%s tag=%s price=[%s, %s] in %.4fs",
        len(items), category, tag, min_price, max_price, time.perf_counter() - t0,
    )
    return items


@router.get("/products/category/{category}", response_model=List[Product])
async def products_by_category(category: str, products = Depends(product_repo)):
    items = await get_products_by_category_svc(products, category)
    logger.info("Response: products_by_category category=%s count=%s", category, len(items))
    return items


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, products = Depends(product_repo)):
    logger.info("Request: get_product product_id=%s", product_id)
    return await get_product_svc(products, product_id)
