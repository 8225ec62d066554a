"""Shared BDD fixtures and step definitions for the cart."""

from decimal import Decimal

import pytest
from ordering.cart.cart import Cart
from ordering.cart.errors import InsufficientStock
from ordering.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartItemQuantityUpdated": CartItemQuantityUpdated,
    "CartItemRemoved": CartItemRemoved,
    "CartCleared": CartCleared,
}


@pytest.fixture()
def error():
    """Container for a captured cart failure."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps: Cart aggregate
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    cart = Cart.open("usr-bdd-001")
    cart._events.clear()
    return cart


@given(parsers.cfparse('the cart has {qty:d} of "{product_id}" priced {price}'), target_fixture="cart")
def cart_with_line(cart, qty, product_id, price):
    cart.add_item(product_id, qty, Decimal(price), count_in_stock=100)
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps: Cart aggregate
# ---------------------------------------------------------------------------
@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    matching = [e for e in cart._events if isinstance(e, event_cls)]
    assert len(matching) == 1, f"Expected one {event_type}. Events: {[type(e).__name__ for e in cart._events]}"


@then("no cart event is raised")
def no_cart_event(cart):
    assert len(cart._events) == 0


@then("the cart action fails with insufficient stock")
def cart_action_fails_for_stock(error):
    assert isinstance(error["exc"], InsufficientStock)


@then(parsers.re(r"the cart has (?P<count>\d+) lines?"), converters={"count": int})
def cart_has_n_lines(cart, count):
    assert len(cart.items) == count
