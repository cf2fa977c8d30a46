"""Cart aggregation: per-user line items with snapshot prices and totals.

Every mutation is a read-modify-write on one cart document. It runs inside
the caller's per-user lock (``UserLocks.hold``) and the repository save is
version-checked, so two concurrent adds for the same user cannot silently
drop each other's quantities.
"""
import logging
from typing import Optional

from storefront.core.errors import NotFound, ValidationError
from storefront.domain.models.cart import Cart, CartItemView, CartLineItem, CartView

logger = logging.getLogger(__name__)

EMPTY_CART = CartView(items=[], subtotal=0, discount=0, total=0)


def _check_quantity(quantity: int) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError(f"quantity must be a positive integer, got {quantity!r}", field="quantity")
    return quantity


async def compute_totals(cart: Cart, products) -> CartView:
    """
    Attach the product display projection to every line and compute:
      subtotal = sum(price_at_addition * quantity)
      total    = subtotal - discount   (not floored, may be negative)
    """
    catalog = {p.product_id: p for p in await products.find_many([i.product_id for i in cart.items])}

    items = []
    subtotal = 0.0
    for line in cart.items:
        product = catalog.get(line.product_id)
        items.append(
            CartItemView(
                item_id=line.item_id,
                product_id=line.product_id,
                quantity=line.quantity,
                price_at_addition=line.price_at_addition,
                product=product.summary() if product else None,
            )
        )
        subtotal += line.price_at_addition * line.quantity

    if len(catalog) < len({i.product_id for i in cart.items}):
        logger.warning("cart user_id=%s references products missing from the catalog", cart.user_id)

    discount = cart.discount or 0
    return CartView(items=items, subtotal=subtotal, discount=discount, total=subtotal - discount)


async def get_cart_svc(carts, products, user_id: str) -> CartView:
    cart = await carts.find_by_user(user_id)
    if cart is None:
        return EMPTY_CART
    return await compute_totals(cart, products)


async def add_item_svc(
    carts,
    products,
    locks,
    user_id: str,
    product_id: str,
    quantity: Optional[int] = None,
) -> CartView:
    """
    Add `quantity` (default 1) of a product. An existing line for the same
    product is incremented; a new line snapshots the current catalog price.
    """
    quantity = 1 if quantity is None else _check_quantity(quantity)

    product = await products.find_by_id(product_id)
    if product is None:
        raise NotFound("product", product_id)

    async with locks.hold(user_id):
        cart = await carts.find_by_user(user_id) or Cart(user_id=user_id)
        line = cart.find_product(product_id)
        if line is not None:
            line.quantity += quantity
        else:
            cart.items.append(
                CartLineItem(product_id=product_id, quantity=quantity, price_at_addition=product.price)
            )
        cart = await carts.save(cart)

    logger.info("cart add user_id=%s product_id=%s quantity=%s lines=%s", user_id, product_id, quantity, len(cart.items))
    return await compute_totals(cart, products)


async def _load_line(carts, user_id: str, item_id: str):
    cart = await carts.find_by_user(user_id)
    if cart is None:
        raise NotFound("cart", user_id)
    line = cart.find_item(item_id)
    if line is None:
        raise NotFound("item", item_id)
    return cart, line


async def update_item_quantity_svc(carts, products, locks, user_id: str, item_id: str, quantity: int) -> CartView:
    """Replace the quantity in place; the price snapshot is left untouched."""
    _check_quantity(quantity)

    async with locks.hold(user_id):
        cart, line = await _load_line(carts, user_id, item_id)
        line.quantity = quantity
        cart = await carts.save(cart)

    logger.info("cart update user_id=%s item_id=%s quantity=%s", user_id, item_id, quantity)
    return await compute_totals(cart, products)


async def remove_item_svc(carts, products, locks, user_id: str, item_id: str) -> CartView:
    async with locks.hold(user_id):
        await _load_line(carts, user_id, item_id)
        if not await carts.delete_child(user_id, item_id):
            # removed between the read and the pull
            raise NotFound("item", item_id)
        cart = await carts.find_by_user(user_id)

    logger.info("cart remove user_id=%s item_id=%s", user_id, item_id)
    return await compute_totals(cart, products)
