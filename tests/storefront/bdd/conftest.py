"""Shared BDD fixtures and step definitions for the storefront cart."""

import pytest
from pytest_bdd import given, parsers, then
from storefront.cart import CartStore
from storefront.cart_page import CartPage
from storefront.storage import MemoryStorage


@pytest.fixture()
def error():
    """Container for captured cart errors."""
    return {"exc": None}


@given("an empty cart", target_fixture="page")
def empty_cart():
    return CartPage(CartStore(MemoryStorage()))


@given(parsers.cfparse('the cart holds {quantity:d} "{product_id}" in {color} size {size}'))
def cart_holds(page, quantity, product_id, color, size):
    page.add_to_cart(product_id=product_id, name=product_id.title(), price=500.0, quantity=quantity, color=color, size=size)


@then(parsers.cfparse("the cart has {count:d} lines"))
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_lines(page, count):
    assert len(page.store.lines) == count


@then(parsers.cfparse("the cart holds {count:d} items worth {total:f}"))
def cart_holds_items(page, count, total):
    assert page.store.total_items == count
    assert page.store.total_price == total
