"""Per-user state tracking for the cart load test scenarios.

Each Locust user instance maintains its own state. ``product_ids`` mirrors
what the server last reported so follow-up updates and removals target
lines that exist.
"""

from dataclasses import dataclass, field


@dataclass
class CartJourneyState:
    """Tracks one simulated shopper's cart."""

    owner: str | None = None
    headers: dict = field(default_factory=dict)
    product_ids: list[str] = field(default_factory=list)
    revision: int = 0

    def sync(self, body: dict) -> None:
        self.product_ids = [line["product_id"] for line in body.get("items", [])]
        self.revision = body.get("revision", self.revision)
