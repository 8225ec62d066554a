"""Ordering bounded context: the server-side shopping cart.

Owns one cart aggregate per user, validates quantities against the catalogue's
stock on every stock-sensitive mutation, and hands frozen cart snapshots to
order placement at checkout.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
