"""Read-side join of catalogue display fields onto a cart.

Population is read-only: it never writes back to the cart document, and a
product that has left the catalogue is shown from the line's own snapshot
instead of failing the read.
"""

from ordering.catalogue.port import ProductLookup
from ordering.shared.money import to_decimal


def _line(item, product: dict | None) -> dict:
    line = {
        "product_id": str(item.product_id),
        "quantity": item.quantity,
        "unit_price": item.unit_price,
        "line_total": item.line_total,
        "added_at": item.added_at,
    }
    if product is None:
        line.update(name=None, description=None, image=None, price=None, unavailable=True)
    else:
        line.update(
            name=product["name"],
            description=product["description"],
            image=product["image"],
            price=product["price"],
            unavailable=False,
        )
    return line


def populate(cart, lookup: ProductLookup) -> dict:
    """Return a plain response structure for ``cart`` with display fields joined in."""
    products = lookup.describe_many([str(item.product_id) for item in cart.items])
    return {
        "owner": str(cart.owner),
        "state": cart.state.value,
        "items": [_line(item, products.get(str(item.product_id))) for item in cart.items],
        "total_items": cart.total_items,
        "total_price": to_decimal(cart.total_price),
        "revision": cart.revision,
        "created_at": cart.created_at,
        "updated_at": cart.updated_at,
    }
