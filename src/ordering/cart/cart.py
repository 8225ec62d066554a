"""Cart aggregate: one per user, keyed by the owner's user id.

The cart holds product lines with a unit price captured when the line was
first added, and two derived totals that are recomputed from the lines on
every mutation. Stock is never owned here: callers pass the catalogue's
current ``count_in_stock`` into each stock-sensitive mutation and the
aggregate decides whether the resulting line quantity is allowed.

State:
    EMPTY      no lines
    POPULATED  at least one line

Lines are unique by product. A repeated add merges into the existing line;
an update sets an absolute quantity and never changes membership.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.cart.errors import CartItemNotFound, InsufficientStock
from ordering.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from ordering.cart.totals import recompute
from ordering.domain import ordering
from ordering.shared.money import ZERO, to_decimal, to_text


class CartState(Enum):
    EMPTY = "Empty"
    POPULATED = "Populated"


def require_positive_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be a positive integer"]})


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = String(required=True, max_length=32)  # unit price at add time, decimal text
    added_at = DateTime()

    @property
    def unit_price(self) -> Decimal:
        return to_decimal(self.price)

    @property
    def line_total(self) -> Decimal:
        return to_decimal(self.unit_price * self.quantity)


@ordering.aggregate
class Cart:
    owner = Identifier(identifier=True, required=True)
    items = HasMany(CartItem)
    total_items = Integer(default=0, min_value=0)
    total_price = String(default="0.00", max_length=32)
    revision = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def totals_must_match_lines(self):
        total_items, total_price = recompute(self)
        if self.total_items != total_items or to_decimal(self.total_price) != total_price:
            raise ValidationError({"totals": ["Cart totals are out of step with its lines"]})

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product may appear on only one cart line"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, owner):
        """Start an empty cart for ``owner``."""
        now = datetime.now(UTC)
        return cls(
            owner=owner,
            total_items=0,
            total_price=to_text(ZERO),
            revision=0,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def state(self) -> CartState:
        return CartState.POPULATED if self.items else CartState.EMPTY

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, unit_price, count_in_stock):
        """Add ``quantity`` of a product, merging into an existing line.

        The requested quantity must fit the stock on its own, and for an
        existing line the combined quantity must fit too. Both checks run
        before anything changes, so a rejected add leaves the cart untouched.
        """
        require_positive_quantity(quantity)
        if count_in_stock < quantity:
            raise InsufficientStock(product_id, quantity, count_in_stock)

        existing = self.line_for(product_id)
        if existing is not None:
            combined = existing.quantity + quantity
            if count_in_stock < combined:
                raise InsufficientStock(product_id, combined, count_in_stock)

        now = datetime.now(UTC)
        with atomic_change(self):
            if existing is not None:
                existing.quantity += quantity
                line = existing
            else:
                line = CartItem(
                    product_id=product_id,
                    quantity=quantity,
                    price=to_text(unit_price),
                    added_at=now,
                )
                self.add_items(line)
            self._refresh(now)

        self.raise_(
            CartItemAdded(
                owner=str(self.owner),
                product_id=str(product_id),
                quantity_added=quantity,
                line_quantity=line.quantity,
                unit_price=line.price,
                total_items=self.total_items,
                total_price=self.total_price,
            )
        )

    def update_item(self, product_id, quantity, count_in_stock):
        """Set an existing line to an absolute ``quantity``. Price is kept."""
        require_positive_quantity(quantity)

        line = self.line_for(product_id)
        if line is None:
            raise CartItemNotFound(self.owner, product_id)
        if count_in_stock < quantity:
            raise InsufficientStock(product_id, quantity, count_in_stock)

        previous_quantity = line.quantity
        now = datetime.now(UTC)
        with atomic_change(self):
            line.quantity = quantity
            self._refresh(now)

        self.raise_(
            CartItemQuantityUpdated(
                owner=str(self.owner),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                total_items=self.total_items,
                total_price=self.total_price,
            )
        )

    def remove_item(self, product_id) -> bool:
        """Drop the product's line. Returns False, changing nothing, if absent."""
        line = self.line_for(product_id)
        if line is None:
            return False

        now = datetime.now(UTC)
        with atomic_change(self):
            self.remove_items(line)
            self._refresh(now)

        self.raise_(
            CartItemRemoved(
                owner=str(self.owner),
                product_id=str(product_id),
                removed_quantity=line.quantity,
                total_items=self.total_items,
                total_price=self.total_price,
            )
        )
        return True

    def clear(self, order_id=None):
        """Empty the cart. Valid on an already-empty cart."""
        lines = list(self.items)
        now = datetime.now(UTC)
        with atomic_change(self):
            for line in lines:
                self.remove_items(line)
            self._refresh(now)

        self.raise_(
            CartCleared(
                owner=str(self.owner),
                cleared_item_count=len(lines),
                order_id=order_id,
            )
        )

    def _refresh(self, now):
        total_items, total_price = recompute(self)
        self.total_items = total_items
        self.total_price = to_text(total_price)
        self.updated_at = now
        self.revision = (self.revision or 0) + 1
