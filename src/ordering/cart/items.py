"""Cart line management: commands and handler.

Each handler reads the catalogue fresh, lets the aggregate decide, and adds
the cart to the repository only when the aggregate actually changed. A
rejected command therefore leaves the stored cart exactly as it was.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.catalogue import get_product_lookup
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class AddItemToCart:
    owner = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="Cart")
class UpdateCartItem:
    """Set a line to an absolute quantity. Zero is not allowed; remove instead."""

    owner = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="Cart")
class RemoveCartItem:
    owner = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddItemToCart)
    def add_item(self, command):
        repo = current_domain.repository_for(Cart)
        product = get_product_lookup().lookup(command.product_id)
        cart = repo.for_owner(command.owner)
        cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            unit_price=product["price"],
            count_in_stock=product["count_in_stock"],
        )
        repo.add(cart)
        return cart

    @handle(UpdateCartItem)
    def update_item(self, command):
        repo = current_domain.repository_for(Cart)
        product = get_product_lookup().lookup(command.product_id)
        cart = repo.for_owner(command.owner)
        cart.update_item(
            product_id=command.product_id,
            quantity=command.quantity,
            count_in_stock=product["count_in_stock"],
        )
        repo.add(cart)
        return cart

    @handle(RemoveCartItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_owner(command.owner)
        if cart.remove_item(command.product_id):
            repo.add(cart)
        return cart
