"""Checkout hand-off between the cart and order placement.

Order placement takes a snapshot, creates its order from the snapshot alone,
and only after the order is durably recorded calls ``complete_checkout`` to
empty the cart. The snapshot is a value object, so the lines and prices an
order is built from cannot drift while the order is being created.
"""

from datetime import UTC, datetime
from decimal import Decimal

import structlog
from protean.exceptions import ValidationError
from protean.fields import DateTime, Dict, Integer, List, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.locking import cart_lock
from ordering.cart.service import clear_cart
from ordering.domain import ordering
from ordering.shared.money import to_decimal

logger = structlog.get_logger(__name__)


@ordering.value_object
class CartSnapshot:
    """The committed contents of a cart at the moment checkout began."""

    owner = String(required=True, max_length=255)
    lines = List(content_type=Dict)  # [{"product_id", "quantity", "unit_price"}]
    total_items = Integer(required=True)
    total_price = String(required=True, max_length=32)
    revision = Integer(required=True)
    captured_at = DateTime(required=True)

    def line_items(self) -> list[tuple[str, int, Decimal]]:
        return [(line["product_id"], line["quantity"], to_decimal(line["unit_price"])) for line in self.lines]

    @property
    def amount(self) -> Decimal:
        return to_decimal(self.total_price)


def take_snapshot(user_id) -> CartSnapshot:
    """Freeze the user's committed cart for order placement.

    Raises:
        ValidationError: the cart is missing or has no lines.
    """
    with cart_lock(user_id):
        cart = current_domain.repository_for(Cart).find(user_id)

    if cart is None or not cart.items:
        raise ValidationError({"cart": ["Cannot check out an empty cart"]})

    snapshot = CartSnapshot(
        owner=str(cart.owner),
        lines=[
            {"product_id": str(item.product_id), "quantity": item.quantity, "unit_price": item.price}
            for item in cart.items
        ],
        total_items=cart.total_items,
        total_price=cart.total_price,
        revision=cart.revision,
        captured_at=datetime.now(UTC),
    )
    logger.info(
        "Cart snapshot taken",
        owner=snapshot.owner,
        total_items=snapshot.total_items,
        total_price=snapshot.total_price,
        revision=snapshot.revision,
    )
    return snapshot


def complete_checkout(snapshot: CartSnapshot, order_id) -> dict:
    """Clear the cart once ``order_id`` has been created from ``snapshot``.

    The cart is cleared even if it changed after the snapshot; lines added in
    between are dropped and a warning records the gap.
    """
    current = current_domain.repository_for(Cart).find(snapshot.owner)
    if current is not None and current.revision != snapshot.revision:
        logger.warning(
            "Cart changed between snapshot and checkout",
            owner=snapshot.owner,
            order_id=str(order_id),
            snapshot_revision=snapshot.revision,
            current_revision=current.revision,
        )
    return clear_cart(snapshot.owner, order_id=order_id)
