"""Tests for Cart line mutations: add, update, remove and clear."""

from decimal import Decimal

import pytest
from ordering.cart.cart import Cart
from ordering.cart.errors import CartItemNotFound, InsufficientStock
from protean.exceptions import ValidationError

PRICE = Decimal("10.00")


def _cart_with(product_id="prod-001", quantity=3, price=PRICE, stock=5):
    cart = Cart.open("usr-001")
    cart.add_item(product_id, quantity, price, count_in_stock=stock)
    return cart


class TestAddItem:
    def test_add_new_line_snapshots_price(self):
        cart = _cart_with(quantity=3)
        line = cart.line_for("prod-001")
        assert line.quantity == 3
        assert line.price == "10.00"
        assert line.added_at is not None

    def test_add_recomputes_totals(self):
        cart = _cart_with(quantity=3)
        assert cart.total_items == 3
        assert cart.total_price == "30.00"

    def test_repeated_add_merges_into_one_line(self):
        cart = _cart_with(quantity=2, stock=10)
        cart.add_item("prod-001", 3, PRICE, count_in_stock=10)
        assert len(cart.items) == 1
        assert cart.line_for("prod-001").quantity == 5
        assert cart.total_items == 5

    def test_merge_keeps_original_snapshot_price(self):
        cart = _cart_with(quantity=1, price=Decimal("10.00"), stock=10)
        cart.add_item("prod-001", 1, Decimal("12.50"), count_in_stock=10)
        assert cart.line_for("prod-001").price == "10.00"
        assert cart.total_price == "20.00"

    def test_distinct_products_get_distinct_lines(self):
        cart = _cart_with("prod-001", 1)
        cart.add_item("prod-002", 2, Decimal("2.50"), count_in_stock=5)
        assert len(cart.items) == 2
        assert cart.total_items == 3
        assert cart.total_price == "15.00"

    def test_request_above_stock_is_rejected(self):
        cart = Cart.open("usr-001")
        with pytest.raises(InsufficientStock) as exc_info:
            cart.add_item("prod-001", 6, PRICE, count_in_stock=5)
        assert exc_info.value.requested == 6
        assert exc_info.value.available == 5
        assert len(cart.items) == 0

    def test_combined_quantity_above_stock_is_rejected(self):
        cart = _cart_with(quantity=3, stock=5)
        with pytest.raises(InsufficientStock) as exc_info:
            cart.add_item("prod-001", 3, PRICE, count_in_stock=5)
        assert exc_info.value.requested == 6
        assert cart.line_for("prod-001").quantity == 3
        assert cart.total_items == 3
        assert cart.total_price == "30.00"

    def test_combined_quantity_equal_to_stock_is_allowed(self):
        cart = _cart_with(quantity=3, stock=5)
        cart.add_item("prod-001", 2, PRICE, count_in_stock=5)
        assert cart.line_for("prod-001").quantity == 5

    @pytest.mark.parametrize("quantity", [0, -1, "3", 1.5, True, None])
    def test_non_positive_or_non_integer_quantity_is_invalid(self, quantity):
        cart = Cart.open("usr-001")
        with pytest.raises(ValidationError):
            cart.add_item("prod-001", quantity, PRICE, count_in_stock=5)
        assert len(cart.items) == 0

    def test_rejected_add_does_not_bump_revision(self):
        cart = _cart_with(quantity=3, stock=5)
        revision = cart.revision
        with pytest.raises(InsufficientStock):
            cart.add_item("prod-001", 3, PRICE, count_in_stock=5)
        assert cart.revision == revision


class TestUpdateItem:
    def test_update_sets_absolute_quantity(self):
        cart = _cart_with(quantity=3, stock=5)
        cart.update_item("prod-001", 5, count_in_stock=5)
        assert cart.line_for("prod-001").quantity == 5
        assert cart.total_items == 5
        assert cart.total_price == "50.00"

    def test_update_keeps_snapshot_price(self):
        cart = _cart_with(quantity=1, price=Decimal("4.99"))
        cart.update_item("prod-001", 2, count_in_stock=5)
        assert cart.line_for("prod-001").price == "4.99"
        assert cart.total_price == "9.98"

    def test_update_above_stock_is_rejected(self):
        cart = _cart_with(quantity=3, stock=5)
        with pytest.raises(InsufficientStock):
            cart.update_item("prod-001", 6, count_in_stock=5)
        assert cart.line_for("prod-001").quantity == 3

    def test_update_of_absent_line_is_not_found(self):
        cart = _cart_with("prod-001")
        with pytest.raises(CartItemNotFound):
            cart.update_item("prod-404", 1, count_in_stock=5)

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_update_to_zero_or_negative_is_invalid(self, quantity):
        cart = _cart_with(quantity=3)
        with pytest.raises(ValidationError):
            cart.update_item("prod-001", quantity, count_in_stock=5)
        assert cart.line_for("prod-001").quantity == 3
        assert cart.total_items == 3


class TestRemoveItem:
    def test_remove_drops_line_and_recomputes(self):
        cart = _cart_with("prod-001", 1)
        cart.add_item("prod-002", 2, Decimal("1.00"), count_in_stock=5)
        assert cart.remove_item("prod-001") is True
        assert cart.line_for("prod-001") is None
        assert cart.total_items == 2
        assert cart.total_price == "2.00"

    def test_remove_only_line_zeroes_totals(self):
        cart = _cart_with(quantity=3)
        cart.remove_item("prod-001")
        assert cart.total_items == 0
        assert cart.total_price == "0.00"

    def test_remove_absent_line_changes_nothing(self):
        cart = _cart_with(quantity=3)
        revision = cart.revision
        updated_at = cart.updated_at
        assert cart.remove_item("prod-404") is False
        assert cart.revision == revision
        assert cart.updated_at == updated_at
        assert cart.total_items == 3


class TestClear:
    def test_clear_empties_cart(self):
        cart = _cart_with("prod-001", 2)
        cart.add_item("prod-002", 1, PRICE, count_in_stock=5)
        cart.clear()
        assert len(cart.items) == 0
        assert cart.total_items == 0
        assert cart.total_price == "0.00"

    def test_clear_on_empty_cart_is_valid(self):
        cart = Cart.open("usr-001")
        cart.clear()
        assert len(cart.items) == 0
        assert cart.revision == 1


class TestRevision:
    def test_each_successful_mutation_bumps_revision_once(self):
        cart = Cart.open("usr-001")
        cart.add_item("prod-001", 1, PRICE, count_in_stock=5)
        cart.add_item("prod-001", 1, PRICE, count_in_stock=5)
        cart.update_item("prod-001", 4, count_in_stock=5)
        cart.remove_item("prod-001")
        cart.clear()
        assert cart.revision == 5
