"""Cart service: the operations the HTTP edge and order placement call.

Every operation takes the authenticated user id explicitly and runs the
whole command, from reading the cart to committing it, inside that user's
cart lock. Results come back populated with catalogue display fields.
"""

import structlog
from protean.utils.globals import current_domain

from ordering.cart.cart import require_positive_quantity
from ordering.cart.enrichment import populate
from ordering.cart.items import AddItemToCart, RemoveCartItem, UpdateCartItem
from ordering.cart.locking import cart_lock
from ordering.cart.management import ClearCart, OpenCart
from ordering.catalogue import get_product_lookup

logger = structlog.get_logger(__name__)


def _run(user_id, command):
    with cart_lock(user_id):
        return current_domain.process(command, asynchronous=False)


def get_cart(user_id) -> dict:
    """Return the user's cart, creating an empty one on first access."""
    cart = _run(user_id, OpenCart(owner=user_id))
    return populate(cart, get_product_lookup())


def add_item(user_id, product_id, quantity) -> dict:
    require_positive_quantity(quantity)
    cart = _run(user_id, AddItemToCart(owner=user_id, product_id=product_id, quantity=quantity))
    line = cart.line_for(product_id)
    logger.info(
        "Cart item added",
        owner=str(user_id),
        product_id=str(product_id),
        quantity=quantity,
        line_quantity=line.quantity,
        revision=cart.revision,
    )
    return populate(cart, get_product_lookup())


def update_item(user_id, product_id, quantity) -> dict:
    require_positive_quantity(quantity)
    cart = _run(user_id, UpdateCartItem(owner=user_id, product_id=product_id, quantity=quantity))
    logger.info(
        "Cart item quantity set",
        owner=str(user_id),
        product_id=str(product_id),
        quantity=quantity,
        revision=cart.revision,
    )
    return populate(cart, get_product_lookup())


def remove_item(user_id, product_id) -> dict:
    cart = _run(user_id, RemoveCartItem(owner=user_id, product_id=product_id))
    logger.info("Cart item removed", owner=str(user_id), product_id=str(product_id), revision=cart.revision)
    return populate(cart, get_product_lookup())


def clear_cart(user_id, order_id=None) -> dict:
    cart = _run(user_id, ClearCart(owner=user_id, order_id=order_id))
    logger.info("Cart cleared", owner=str(user_id), order_id=order_id, revision=cart.revision)
    return populate(cart, get_product_lookup())
