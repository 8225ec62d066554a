"""Document-store catalogue adapter.

Reads ``CatalogueProduct`` documents straight from the store on every call.
No caching: a stock check must see the count as it is now.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.errors import ProductNotFound
from ordering.catalogue.port import ProductLookup
from ordering.catalogue.products import CatalogueProduct
from ordering.shared.money import to_decimal


def _as_info(record) -> dict:
    return {
        "product_id": str(record.product_id),
        "name": record.name,
        "description": record.description,
        "image": record.image,
        "price": to_decimal(record.price),
        "count_in_stock": record.count_in_stock or 0,
    }


class DocumentStoreCatalogue(ProductLookup):
    """Catalogue lookups served from the shared document store."""

    def lookup(self, product_id: str) -> dict:
        repo = current_domain.repository_for(CatalogueProduct)
        try:
            record = repo.get(str(product_id))
        except ObjectNotFoundError as exc:
            raise ProductNotFound(product_id) from exc
        return _as_info(record)

    def describe_many(self, product_ids: list[str]) -> dict[str, dict]:
        repo = current_domain.repository_for(CatalogueProduct)
        found = {}
        for product_id in product_ids:
            try:
                found[str(product_id)] = _as_info(repo.get(str(product_id)))
            except ObjectNotFoundError:
                continue
        return found
