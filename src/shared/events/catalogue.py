"""Cross-domain event contracts for Catalogue domain events.

These classes define the event shape the Ordering domain consumes to keep its
copy of the product documents current. They are registered as external
events via domain.register_external_event() with matching __type__ strings
so Protean's stream deserialization works correctly.

Prices travel as decimal text, never as floats.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, Integer, String, Text


class ProductListed(BaseEvent):
    """A product became available for sale."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    description = Text()
    image = String()
    price = String(required=True)
    count_in_stock = Integer(required=True)
    listed_at = DateTime(required=True)


class ProductPriceChanged(BaseEvent):
    """The catalogue price of a product changed."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    previous_price = String()
    new_price = String(required=True)
    changed_at = DateTime(required=True)


class ProductStockChanged(BaseEvent):
    """The sellable stock count of a product changed."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    count_in_stock = Integer(required=True)
    changed_at = DateTime(required=True)


class ProductDelisted(BaseEvent):
    """A product was withdrawn from the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    delisted_at = DateTime(required=True)
