"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import CartAggregator
from ordering.cart.line_item import LineItem
from ordering.cart.store import MemoryCartStore
from pytest_bdd import given, parsers, then


def line_item(product_id, variant_key, price, qty):
    return LineItem(
        product_id=product_id,
        variant_key=variant_key,
        unit_price=price,
        quantity=qty,
        display_name=f"Product {product_id}",
    )


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    return CartAggregator(MemoryCartStore(), key="bddCart")


@given(
    parsers.cfparse('the cart holds product "{product_id}" variant "{variant_key}" priced {price:d} quantity {qty:d}')
)
def cart_holds(cart, product_id, variant_key, price, qty):
    cart.add(line_item(product_id, variant_key, price, qty))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} entry"))
def cart_has_n_entries_singular(cart, count):
    assert len(cart) == count


@then(parsers.cfparse("the cart has {count:d} entries"))
def cart_has_n_entries(cart, count):
    assert len(cart) == count


@then(parsers.cfparse('the entry for product "{product_id}" variant "{variant_key}" has quantity {qty:d}'))
def entry_has_quantity(cart, product_id, variant_key, qty):
    assert cart.find(product_id, variant_key).quantity == qty


@then(parsers.cfparse("the cart total is {total:d}"))
def cart_total_is(cart, total):
    assert cart.total == total


@then(parsers.cfparse("the cart item count is {count:d}"))
def cart_item_count_is(cart, count):
    assert cart.item_count == count
