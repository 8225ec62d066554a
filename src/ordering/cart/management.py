"""Cart lifecycle: commands and handler.

Carts are never created explicitly by clients. ``OpenCart`` is the
get-or-create used by reads, and ``ClearCart`` empties a cart either on
request or once checkout has turned it into an order.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class OpenCart:
    """Make sure the owner has a stored cart."""

    owner = Identifier(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    owner = Identifier(required=True)
    order_id = Identifier()  # set when checkout cleared the cart


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find(command.owner)
        if cart is None:
            cart = Cart.open(command.owner)
            repo.add(cart)
        return cart

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_owner(command.owner)
        cart.clear(order_id=command.order_id)
        repo.add(cart)
        return cart
