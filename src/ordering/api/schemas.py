"""Pydantic request/response schemas for the cart API.

These are external contracts, separate from the internal Protean commands.
Money is exposed as ``Decimal`` and serialised as decimal strings.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, StrictInt


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: StrictInt = Field(ge=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartItemRequest(BaseModel):
    quantity: StrictInt = Field(ge=1)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class CartLineResponse(BaseModel):
    product_id: str
    name: str | None = None
    description: str | None = None
    image: str | None = None
    price: Decimal | None = None  # current catalogue price, display only
    unit_price: Decimal  # price captured when the line was added
    quantity: int
    line_total: Decimal
    unavailable: bool = False
    added_at: datetime | None = None


class CartResponse(BaseModel):
    owner: str
    state: str
    items: list[CartLineResponse] = []
    total_items: int
    total_price: Decimal
    revision: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
