"""Domain events for the Cart aggregate.

Every event carries the totals recomputed by the mutation that raised it.
"""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or an existing line was topped up."""

    __version__ = "v1"

    owner = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    line_quantity = Integer(required=True)
    unit_price = String(required=True, max_length=32)
    total_items = Integer(required=True)
    total_price = String(required=True, max_length=32)


@ordering.event(part_of="Cart")
class CartItemQuantityUpdated:
    """The quantity of a cart line was set to a new absolute value."""

    __version__ = "v1"

    owner = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_items = Integer(required=True)
    total_price = String(required=True, max_length=32)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = "v1"

    owner = Identifier(required=True)
    product_id = Identifier(required=True)
    removed_quantity = Integer(required=True)
    total_items = Integer(required=True)
    total_price = String(required=True, max_length=32)


@ordering.event(part_of="Cart")
class CartCleared:
    """All lines were removed. ``order_id`` is set when checkout cleared it."""

    __version__ = "v1"

    owner = Identifier(required=True)
    cleared_item_count = Integer(required=True)
    order_id = Identifier()
