"""BDD tests for cart line items."""

from ordering.cart.line_item import LineItem
from pytest_bdd import parsers, scenarios, when

scenarios("features/cart_items.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('product "{product_id}" variant "{variant_key}" priced {price:d} is added with quantity {qty:d}'))
def add_to_cart(cart, product_id, variant_key, price, qty):
    cart.add(LineItem(product_id=product_id, variant_key=variant_key, unit_price=price, quantity=qty))


@when(parsers.cfparse('the quantity of product "{product_id}" variant "{variant_key}" is set to {qty:d}'))
def set_quantity(cart, product_id, variant_key, qty):
    cart.set_quantity(product_id, variant_key, qty)


@when(parsers.cfparse('product "{product_id}" variant "{variant_key}" is removed'))
def remove_from_cart(cart, product_id, variant_key):
    cart.remove(product_id, variant_key)
