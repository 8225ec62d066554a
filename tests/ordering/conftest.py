from datetime import UTC, datetime

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    from ordering.cart.locking import reset_locks
    from ordering.catalogue import reset_product_lookup
    from protean import current_domain

    with ordering_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_product_lookup()
    reset_locks()


@pytest.fixture()
def stock():
    """Seed a catalogue product document the cart can read."""
    from ordering.catalogue.products import CatalogueProduct
    from protean import current_domain

    def _stock(product_id, count_in_stock=10, price="10.00", name=None, **extra):
        record = CatalogueProduct(
            product_id=product_id,
            name=name or f"Product {product_id}",
            description=extra.get("description", "A product"),
            image=extra.get("image", f"/images/{product_id}.png"),
            price=price,
            count_in_stock=count_in_stock,
            updated_at=datetime.now(UTC),
        )
        current_domain.repository_for(CatalogueProduct).add(record)
        return record

    return _stock
