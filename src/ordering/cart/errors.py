"""Cart failure kinds.

``ValidationError`` (from Protean) covers malformed arguments. The classes
below cover the remaining terminal failures plus the one retryable condition
the cart itself can produce.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError


class ProductNotFound(ObjectNotFoundError):
    """The referenced product does not exist in the catalogue."""

    def __init__(self, product_id):
        self.product_id = str(product_id)
        self.message = f"Product {self.product_id} does not exist"
        super().__init__({"product_id": [self.message]})


class CartItemNotFound(ObjectNotFoundError):
    """The product is not a line in the user's cart."""

    def __init__(self, owner, product_id):
        self.owner = str(owner)
        self.product_id = str(product_id)
        self.message = f"Product {self.product_id} is not in the cart"
        super().__init__({"product_id": [self.message]})


class InsufficientStock(InvalidOperationError):
    """Requested quantity exceeds the product's ``count_in_stock``.

    ``requested`` is the quantity the line would end up with, which for a
    repeated add is the combined quantity, not the increment.
    """

    def __init__(self, product_id, requested, available):
        self.product_id = str(product_id)
        self.requested = requested
        self.available = available
        self.message = f"Insufficient stock for product {self.product_id}: requested {requested}, available {available}"
        super().__init__({"quantity": [self.message]})


class CartBusy(Exception):
    """The owner's cart lock could not be acquired in time. Safe to retry."""

    def __init__(self, owner, timeout):
        self.owner = str(owner)
        self.timeout = timeout
        super().__init__(f"Cart for {self.owner} is busy; gave up after {timeout}s")
