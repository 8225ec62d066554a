"""Product lookup port: the cart's read-only view of the catalogue.

The cart programs against this interface; adapters decide where product
documents actually come from. Implementations must read fresh on every call:
stock levels are owned by the catalogue and change underneath the cart.
"""

from abc import ABC, abstractmethod


class ProductLookup(ABC):
    """Abstract interface for catalogue adapters."""

    @abstractmethod
    def lookup(self, product_id: str) -> dict:
        """Fetch one product.

        Returns:
            dict with keys: product_id, name, description, image,
            price (Decimal), count_in_stock (int)

        Raises:
            ProductNotFound: when the catalogue has no such product.
        """
        ...

    @abstractmethod
    def describe_many(self, product_ids: list[str]) -> dict[str, dict]:
        """Fetch display data for several products at once.

        Products that no longer exist are simply absent from the result.
        """
        ...
