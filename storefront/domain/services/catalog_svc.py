import logging
import time
from typing import List, Optional

from storefront.core.errors import NotFound
from storefront.domain.models.product import Product
from storefront.domain.services.filters import catalog_filters

logger = logging.getLogger(__name__)


async def get_all_products_svc(products) -> List[Product]:
    """Whole catalog in insertion order, no pagination."""
    return await products.find()


async def get_product_svc(products, product_id: str) -> Product:
    product = await products.find_by_id(product_id)
    if product is None:
        raise NotFound("product", product_id)
    return product


async def get_products_by_category_svc(products, category: str) -> List[Product]:
    # exact, case-sensitive match
    return await products.find({"category": category})


async def search_products_svc(
    products,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[Product]:
    t0 = time.perf_counter()
    filters = catalog_filters(category=category, tag=tag, min_price=min_price, max_price=max_price)
    logger.debug("catalog search filters=%s", filters)
    items = await products.find(filters)
    logger.info("catalog search done items=%s time=%.3fs", len(items), time.perf_counter() - t0)
    return items
