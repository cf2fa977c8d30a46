# storefront/api/v1/routers/cart.py
from fastapi import APIRouter, Depends, status
import time
import logging

from storefront.api.deps import cart_locks, cart_repo, product_repo
from storefront.api.v1.schemas.cart import AddItemIn, UpdateQuantityIn
from storefront.domain.models.cart import CartView
from storefront.domain.services.cart_svc import (
    add_item_svc,
    get_cart_svc,
    remove_item_svc,
    update_item_quantity_svc,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])

# user_id is supplied by the identity layer in front of this service


@router.get("/{user_id}", response_model=CartView)
async def get_cart(
    user_id: str,
    carts = Depends(cart_repo),
    products = Depends(product_repo),
):
    """Cart with totals. A user without a cart gets an empty view, not a 404."""
    return await get_cart_svc(carts, products, user_id)


@router.post("/{user_id}/items", response_model=CartView, status_code=status.HTTP_201_CREATED)
async def add_item(
    user_id: str,
    body: AddItemIn,
    carts = Depends(cart_repo),
    products = Depends(product_repo),
    locks = Depends(cart_locks),
):
    logger.info("Request: add_item user_id=%s product_id=%s quantity=%s", user_id, body.product_id, body.quantity)
    t0 = time.perf_counter()
    view = await add_item_svc(carts, products, locks, user_id, body.product_id, body.quantity)
    logger.info("Response: add_item user_id=%s lines=%s total=%.2f in %.4fs", user_id, len(view.items), view.total, time.perf_counter() - t0)
    return view


@router.put("/{user_id}/items/{item_id}", response_model=CartView)
async def update_item(
    user_id: str,
    item_id: str,
    body: UpdateQuantityIn,
    carts = Depends(cart_repo),
    products = Depends(product_repo),
    locks = Depends(cart_locks),
):
    logger.info("Request: update_item user_id=%s item_id=%s quantity=%s", user_id, item_id, body.quantity)
    return await update_item_quantity_svc(carts, products, locks, user_id, item_id, body.quantity)


@router.delete("/{user_id}/items/{item_id}", response_model=CartView)
async def remove_item(
    user_id: str,
    item_id: str,
    carts = Depends(cart_repo),
    products = Depends(product_repo),
    locks = Depends(cart_locks),
):
    logger.info("Request: remove_item user_id=%s item_id=%s", user_id, item_id)
    return await remove_item_svc(carts, products, locks, user_id, item_id)
