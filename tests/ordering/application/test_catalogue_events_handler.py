"""Application tests for CatalogueSyncHandler: ordering mirrors Catalogue events."""

from datetime import UTC, datetime

import pytest
from ordering.cart import service
from ordering.catalogue.catalogue_events import CatalogueSyncHandler
from ordering.catalogue.products import CatalogueProduct
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from shared.events.catalogue import ProductDelisted, ProductListed, ProductPriceChanged, ProductStockChanged

OWNER = "usr-sync-001"


def _listed(product_id="prod-001", price="10.00", count_in_stock=5):
    return ProductListed(
        product_id=product_id,
        name="Trail Mug",
        description="Enamel camping mug",
        image="/images/mug.png",
        price=price,
        count_in_stock=count_in_stock,
        listed_at=datetime.now(UTC),
    )


def _document(product_id="prod-001"):
    return current_domain.repository_for(CatalogueProduct).get(product_id)


class TestProductListed:
    def test_creates_product_document(self):
        CatalogueSyncHandler().on_product_listed(_listed(price="12.5"))

        record = _document()
        assert record.name == "Trail Mug"
        assert record.price == "12.50"
        assert record.count_in_stock == 5

    def test_listed_product_can_be_added_to_cart(self):
        CatalogueSyncHandler().on_product_listed(_listed(count_in_stock=2))
        cart = service.add_item(OWNER, "prod-001", 2)
        assert cart["items"][0]["name"] == "Trail Mug"


class TestProductPriceChanged:
    def test_updates_catalogue_price(self):
        handler = CatalogueSyncHandler()
        handler.on_product_listed(_listed(price="10.00"))
        handler.on_price_changed(
            ProductPriceChanged(
                product_id="prod-001",
                previous_price="10.00",
                new_price="14.00",
                changed_at=datetime.now(UTC),
            )
        )
        assert _document().price == "14.00"

    def test_cart_keeps_snapshot_price_and_totals(self):
        handler = CatalogueSyncHandler()
        handler.on_product_listed(_listed(price="10.00"))
        service.add_item(OWNER, "prod-001", 2)

        handler.on_price_changed(
            ProductPriceChanged(product_id="prod-001", new_price="99.00", changed_at=datetime.now(UTC))
        )

        cart = service.get_cart(OWNER)
        line = cart["items"][0]
        assert str(line["unit_price"]) == "10.00"
        assert str(line["price"]) == "99.00"
        assert str(cart["total_price"]) == "20.00"

    def test_unknown_product_is_ignored(self):
        CatalogueSyncHandler().on_price_changed(
            ProductPriceChanged(product_id="prod-404", new_price="1.00", changed_at=datetime.now(UTC))
        )
        with pytest.raises(ObjectNotFoundError):
            _document("prod-404")


class TestProductStockChanged:
    def test_updates_stock_used_by_next_mutation(self):
        handler = CatalogueSyncHandler()
        handler.on_product_listed(_listed(count_in_stock=5))
        handler.on_stock_changed(
            ProductStockChanged(product_id="prod-001", count_in_stock=1, changed_at=datetime.now(UTC))
        )
        assert _document().count_in_stock == 1

    def test_negative_stock_is_floored_at_zero(self):
        handler = CatalogueSyncHandler()
        handler.on_product_listed(_listed())
        handler.on_stock_changed(
            ProductStockChanged(product_id="prod-001", count_in_stock=-3, changed_at=datetime.now(UTC))
        )
        assert _document().count_in_stock == 0


class TestProductDelisted:
    def test_removes_document(self):
        handler = CatalogueSyncHandler()
        handler.on_product_listed(_listed())
        handler.on_product_delisted(ProductDelisted(product_id="prod-001", delisted_at=datetime.now(UTC)))
        with pytest.raises(ObjectNotFoundError):
            _document()

    def test_cart_line_shows_as_unavailable(self):
        handler = CatalogueSyncHandler()
        handler.on_product_listed(_listed())
        service.add_item(OWNER, "prod-001", 1)
        handler.on_product_delisted(ProductDelisted(product_id="prod-001", delisted_at=datetime.now(UTC)))

        line = service.get_cart(OWNER)["items"][0]
        assert line["unavailable"] is True
        assert line["name"] is None
        assert str(line["unit_price"]) == "10.00"

    def test_delisting_unknown_product_is_noop(self):
        CatalogueSyncHandler().on_product_delisted(ProductDelisted(product_id="prod-404", delisted_at=datetime.now(UTC)))
