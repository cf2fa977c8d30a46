"""Tests for the cart aggregator services."""

import asyncio

import pytest

from storefront.core.errors import CartConflict, NotFound, ValidationError
from storefront.domain.models.cart import Cart, CartLineItem
from storefront.domain.services.cart_svc import (
    add_item_svc,
    compute_totals,
    get_cart_svc,
    remove_item_svc,
    update_item_quantity_svc,
)

from fakes import make_product


@pytest.mark.asyncio
async def test_unknown_user_gets_empty_cart(carts, products):
    view = await get_cart_svc(carts, products, "nobody")

    assert view.model_dump() == {"items": [], "subtotal": 0, "discount": 0, "total": 0}


@pytest.mark.asyncio
async def test_add_item_defaults_quantity_to_one(carts, products, locks):
    view = await add_item_svc(carts, products, locks, "u1", "5")

    assert len(view.items) == 1
    line = view.items[0]
    assert line.product_id == "5"
    assert line.quantity == 1
    assert line.price_at_addition == pytest.approx(12.99)
    assert line.product.id == "5"
    assert line.product.name == "Bamboo Toothbrush Set"
    assert line.product.image == "toothbrush.jpg"
    assert view.subtotal == pytest.approx(12.99)
    assert view.total == pytest.approx(12.99)


@pytest.mark.asyncio
async def test_adding_same_product_accumulates_quantity(carts, products, locks):
    await add_item_svc(carts, products, locks, "u1", "7", 2)
    view = await add_item_svc(carts, products, locks, "u1", "7", 3)

    assert len(view.items) == 1
    assert view.items[0].quantity == 5
    assert view.subtotal == pytest.approx(39.99 * 5)


@pytest.mark.asyncio
async def test_lines_keep_insertion_order(carts, products, locks):
    await add_item_svc(carts, products, locks, "u1", "8")
    await add_item_svc(carts, products, locks, "u1", "3")
    view = await add_item_svc(carts, products, locks, "u1", "8")

    assert [i.product_id for i in view.items] == ["8", "3"]


@pytest.mark.asyncio
async def test_price_snapshot_survives_catalog_price_change(store, carts, products, locks):
    await add_item_svc(carts, products, locks, "u1", "5", 2)
    store.products["5"] = store.products["5"].model_copy(update={"price": 99.0})

    view = await add_item_svc(carts, products, locks, "u1", "5", 1)

    line = view.items[0]
    assert line.price_at_addition == pytest.approx(12.99)
    assert line.product.price == pytest.approx(99.0)
    assert view.subtotal == pytest.approx(12.99 * 3)


@pytest.mark.asyncio
async def test_add_unknown_product_raises_not_found(carts, products, locks):
    with pytest.raises(NotFound):
        await add_item_svc(carts, products, locks, "u1", "404")

    assert await carts.find_by_user("u1") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -3])
async def test_add_non_positive_quantity_is_rejected(carts, products, locks, quantity):
    with pytest.raises(ValidationError):
        await add_item_svc(carts, products, locks, "u1", "5", quantity)


@pytest.mark.asyncio
async def test_update_quantity_replaces_without_resnapshot(store, carts, products, locks):
    view = await add_item_svc(carts, products, locks, "u1", "6", 4)
    item_id = view.items[0].item_id
    store.products["6"] = store.products["6"].model_copy(update={"price": 1.0})

    view = await update_item_quantity_svc(carts, products, locks, "u1", item_id, 2)

    assert view.items[0].quantity == 2
    assert view.items[0].price_at_addition == pytest.approx(59.99)
    assert view.subtotal == pytest.approx(59.99 * 2)


@pytest.mark.asyncio
async def test_update_missing_cart_or_item_raises_not_found(carts, products, locks):
    with pytest.raises(NotFound):
        await update_item_quantity_svc(carts, products, locks, "ghost", "abc", 1)

    await add_item_svc(carts, products, locks, "u1", "6")
    with pytest.raises(NotFound):
        await update_item_quantity_svc(carts, products, locks, "u1", "abc", 1)


@pytest.mark.asyncio
async def test_update_with_zero_quantity_is_rejected(carts, products, locks):
    view = await add_item_svc(carts, products, locks, "u1", "6")

    with pytest.raises(ValidationError):
        await update_item_quantity_svc(carts, products, locks, "u1", view.items[0].item_id, 0)


@pytest.mark.asyncio
async def test_remove_item(carts, products, locks):
    await add_item_svc(carts, products, locks, "u1", "5")
    view = await add_item_svc(carts, products, locks, "u1", "8", 2)
    first = view.items[0].item_id

    view = await remove_item_svc(carts, products, locks, "u1", first)

    assert [i.product_id for i in view.items] == ["8"]
    assert view.subtotal == pytest.approx(24.99 * 2)


@pytest.mark.asyncio
async def test_remove_missing_cart_or_item_raises_not_found(carts, products, locks):
    with pytest.raises(NotFound):
        await remove_item_svc(carts, products, locks, "ghost", "abc")

    await add_item_svc(carts, products, locks, "u1", "5")
    with pytest.raises(NotFound):
        await remove_item_svc(carts, products, locks, "u1", "abc")


@pytest.mark.asyncio
async def test_totals_allow_negative_total(products):
    cart = Cart(
        user_id="u1",
        items=[
            CartLineItem(product_id="5", quantity=2, price_at_addition=10.0),
            CartLineItem(product_id="8", quantity=1, price_at_addition=5.5),
        ],
        discount=40.0,
    )

    view = await compute_totals(cart, products)

    assert view.subtotal == pytest.approx(25.5)
    assert view.discount == 40.0
    assert view.total == view.subtotal - 40.0
    assert view.total < 0


@pytest.mark.asyncio
async def test_totals_keep_lines_for_products_missing_from_catalog(products):
    cart = Cart(user_id="u1", items=[CartLineItem(product_id="gone", quantity=3, price_at_addition=2.0)])

    view = await compute_totals(cart, products)

    assert view.items[0].product is None
    assert view.subtotal == pytest.approx(6.0)


@pytest.mark.asyncio
async def test_concurrent_adds_for_one_user_are_serialized(carts, products, locks):
    await asyncio.gather(*(add_item_svc(carts, products, locks, "u1", "7", 1) for _ in range(10)))

    view = await get_cart_svc(carts, products, "u1")
    assert len(view.items) == 1
    assert view.items[0].quantity == 10


@pytest.mark.asyncio
async def test_stale_save_raises_conflict(carts, products, locks):
    await add_item_svc(carts, products, locks, "u1", "7")
    first = await carts.find_by_user("u1")
    second = await carts.find_by_user("u1")

    first.items[0].quantity = 4
    await carts.save(first)

    second.items[0].quantity = 9
    with pytest.raises(CartConflict):
        await carts.save(second)

    assert (await carts.find_by_user("u1")).items[0].quantity == 4


@pytest.mark.asyncio
async def test_repository_reads_do_not_alias_stored_cart(store, carts, products, locks):
    await add_item_svc(carts, products, locks, "u1", "7")
    cart = await carts.find_by_user("u1")
    cart.items[0].quantity = 100

    assert store.carts["u1"].items[0].quantity == 1


@pytest.mark.asyncio
async def test_cart_with_custom_catalog(empty_store, locks):
    from storefront.domain.repositories.memory_repo import InMemoryCartRepo, InMemoryProductRepo

    products = InMemoryProductRepo(empty_store)
    carts = InMemoryCartRepo(empty_store)
    await products.save(make_product("a", 0.5, 1))

    view = await add_item_svc(carts, products, locks, "u1", "a", 4)

    assert view.subtotal == pytest.approx(2.0)
    assert view.total == pytest.approx(2.0)
