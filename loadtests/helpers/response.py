"""Response error extraction for load test observability.

Parses cart API error responses into human-readable messages. The API
renders every failure as {"error": {"code": "...", ...}}; protean's own
handlers may still answer with {"error": "msg"} for exceptions the cart
does not map itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

# Outcomes a correct cart produces under contention; not load-test failures.
EXPECTED_CONFLICTS = {404, 409, 503}


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message suitable for Locust failure lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            code = error.get("code")
            rest = " | ".join(f"{k}: {v}" for k, v in error.items() if k != "code")
            return f"{code}: {rest}" if code else rest
        return str(error)

    return str(body)[:300]


def is_expected_conflict(response: Response) -> bool:
    """404/409/503 are legitimate answers when shoppers race for stock."""
    return response.status_code in EXPECTED_CONFLICTS
