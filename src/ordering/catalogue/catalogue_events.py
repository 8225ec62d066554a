"""Inbound cross-domain event handler: the ordering context mirrors the catalogue.

Keeps the ``CatalogueProduct`` documents the cart reads stock and prices from
in step with Catalogue events. Price changes only move the catalogue price;
cart lines keep the price they were added at.

Cross-domain events are imported from shared.events.catalogue and registered
as external events via ordering.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.catalogue import ProductDelisted, ProductListed, ProductPriceChanged, ProductStockChanged

from ordering.cart.cart import Cart
from ordering.catalogue.products import CatalogueProduct
from ordering.domain import ordering
from ordering.shared.money import to_text

logger = structlog.get_logger(__name__)

ordering.register_external_event(ProductListed, "Catalogue.ProductListed.v1")
ordering.register_external_event(ProductPriceChanged, "Catalogue.ProductPriceChanged.v1")
ordering.register_external_event(ProductStockChanged, "Catalogue.ProductStockChanged.v1")
ordering.register_external_event(ProductDelisted, "Catalogue.ProductDelisted.v1")


def _find(product_id):
    try:
        return current_domain.repository_for(CatalogueProduct).get(str(product_id))
    except ObjectNotFoundError:
        return None


@ordering.event_handler(part_of=Cart, stream_category="catalogue::product")
class CatalogueSyncHandler:
    """Mirrors Catalogue product events into the ordering context's product documents."""

    @handle(ProductListed)
    def on_product_listed(self, event: ProductListed) -> None:
        """Create the product document, or overwrite it on a re-listing."""
        logger.info("Mirroring listed product", product_id=str(event.product_id))
        current_domain.repository_for(CatalogueProduct).add(
            CatalogueProduct(
                product_id=str(event.product_id),
                name=event.name,
                description=event.description,
                image=event.image,
                price=to_text(event.price),
                count_in_stock=event.count_in_stock,
                updated_at=event.listed_at,
            )
        )

    @handle(ProductPriceChanged)
    def on_price_changed(self, event: ProductPriceChanged) -> None:
        record = _find(event.product_id)
        if record is None:
            logger.warning("Price change for unknown product ignored", product_id=str(event.product_id))
            return

        record.price = to_text(event.new_price)
        record.updated_at = event.changed_at
        current_domain.repository_for(CatalogueProduct).add(record)

    @handle(ProductStockChanged)
    def on_stock_changed(self, event: ProductStockChanged) -> None:
        record = _find(event.product_id)
        if record is None:
            logger.warning("Stock change for unknown product ignored", product_id=str(event.product_id))
            return

        record.count_in_stock = max(event.count_in_stock, 0)
        record.updated_at = event.changed_at
        current_domain.repository_for(CatalogueProduct).add(record)

    @handle(ProductDelisted)
    def on_product_delisted(self, event: ProductDelisted) -> None:
        """Drop the document. Carts holding the product show it as unavailable."""
        record = _find(event.product_id)
        if record is None:
            return

        logger.info("Removing delisted product", product_id=str(event.product_id))
        current_domain.repository_for(CatalogueProduct)._dao.delete(record)
