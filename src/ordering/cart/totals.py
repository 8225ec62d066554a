"""Derived cart totals.

``recompute`` is the only place cart totals are derived. Mutators call it
right before persisting; nothing adjusts ``total_items`` or ``total_price``
incrementally.
"""

from decimal import Decimal

from ordering.shared.money import ZERO, to_decimal


def recompute(cart) -> tuple[int, Decimal]:
    """Return ``(total_items, total_price)`` for the cart's current lines."""
    total_items = 0
    total_price = ZERO
    for item in cart.items:
        total_items += item.quantity
        total_price += to_decimal(item.price) * item.quantity
    return total_items, to_decimal(total_price)
