"""Protean Engine runner for the cart service.

Runs the ordering domain's asynchronous subscribers, chiefly the catalogue
sync handler that mirrors Catalogue product events into the product
documents the cart reads stock and prices from.

Usage:
    python src/server.py
    python src/server.py --test-mode   # drain pending messages and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine

from ordering.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _get_domain():
    from ordering.domain import ordering

    ordering.init()
    return ordering


async def run(test_mode: bool = False):
    domain = _get_domain()
    logger.info("Starting engine", domain=domain.name, test_mode=test_mode)
    engine = Engine(domain, test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Cart service engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    configure_logging()
    asyncio.run(run(args.test_mode))


if __name__ == "__main__":
    main()
