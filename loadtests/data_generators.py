"""Data generators for the cart load test scenarios.

Payloads match the field names expected by the cart API's Pydantic request
schemas. Product ids come from LOADTEST_PRODUCT_IDS (comma separated) and
must already be mirrored into the service's catalogue documents.
"""

import os
import random
import time
import uuid

from faker import Faker
from jose import jwt

fake = Faker()

DEFAULT_PRODUCT_IDS = "prod-lt-001,prod-lt-002,prod-lt-003,prod-lt-004,prod-lt-005"


def product_ids() -> list[str]:
    raw = os.getenv("LOADTEST_PRODUCT_IDS", DEFAULT_PRODUCT_IDS)
    return [pid.strip() for pid in raw.split(",") if pid.strip()]


def user_id() -> str:
    """Generate unique user ids like 'usr-lt-jdoe-a1b2c3d4'."""
    return f"usr-lt-{fake.user_name()[:12]}-{uuid.uuid4().hex[:8]}"


def bearer_token(owner: str, is_admin: bool = False, ttl_seconds: int = 3600) -> str:
    """Sign a session token the way the identity service would."""
    claims = {
        "userId": owner,
        "isAdmin": is_admin,
        "exp": int(time.time()) + ttl_seconds,
    }
    return jwt.encode(
        claims,
        os.getenv("TOKEN_SECRET", "dev-secret-change-me"),
        algorithm=os.getenv("TOKEN_ALGORITHM", "HS256"),
    )


def auth_headers(owner: str) -> dict:
    return {"Authorization": f"Bearer {bearer_token(owner)}"}


def cart_item_data(product_id: str | None = None, max_quantity: int = 3) -> dict:
    return {
        "product_id": product_id or random.choice(product_ids()),
        "quantity": random.randint(1, max_quantity),
    }


def quantity_update_data(max_quantity: int = 5) -> dict:
    return {"quantity": random.randint(1, max_quantity)}
