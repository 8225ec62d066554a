"""Repository for the Cart aggregate."""

from protean.exceptions import ObjectNotFoundError

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.repository(part_of=Cart)
class CartRepository:
    """Carts are stored one document per owner, under the owner's user id."""

    def find(self, owner) -> Cart | None:
        try:
            return self.get(str(owner))
        except ObjectNotFoundError:
            return None

    def for_owner(self, owner) -> Cart:
        """Return the owner's cart, or a new unsaved empty one."""
        cart = self.find(owner)
        return cart if cart is not None else Cart.open(str(owner))
