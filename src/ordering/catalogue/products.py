"""Catalogue product documents as the ordering context sees them.

The catalogue context owns these records; ordering only reads them, apart
from the sync handler in ``catalogue_events`` that mirrors catalogue events
into the store.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.projection
class CatalogueProduct:
    product_id = Identifier(identifier=True, required=True)
    name = String(required=True, max_length=255)
    description = Text()
    image = String(max_length=1024)
    price = String(required=True, max_length=32)  # decimal text
    count_in_stock = Integer(default=0, min_value=0)
    updated_at = DateTime()
