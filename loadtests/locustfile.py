"""Cart service load testing: Locust entry point.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Independent shoppers only:
    locust -f loadtests/locustfile.py CartShopper

    # Same-cart contention:
    locust -f loadtests/locustfile.py ContendedCartUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py CartShopper --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail, is_expected_conflict
from loadtests.scenarios.cart import CartShopper, ContendedCartUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every unexpected failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400 and not is_expected_conflict(response):
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the per-endpoint failure counts when the run ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    for entry in environment.stats.entries.values():
        if entry.num_failures:
            print(f"  {entry.method} {entry.name}: {entry.num_failures} failures of {entry.num_requests}")
    print()
