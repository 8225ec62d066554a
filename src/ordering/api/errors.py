"""Maps cart failures onto HTTP responses.

Protean's own FastAPI handlers stay registered for every other Protean
exception; the handlers here are keyed on the cart's subclasses, which
Starlette resolves before their Protean base classes.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from protean.integrations.fastapi import register_exception_handlers

from ordering.cart.errors import CartBusy, CartItemNotFound, InsufficientStock, ProductNotFound

logger = structlog.get_logger(__name__)


def _error(status_code: int, code: str, **fields) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, **fields}})


async def product_not_found_handler(request: Request, exc: ProductNotFound) -> JSONResponse:
    return _error(404, "product_not_found", product_id=exc.product_id, message=exc.message)


async def cart_item_not_found_handler(request: Request, exc: CartItemNotFound) -> JSONResponse:
    return _error(404, "cart_item_not_found", product_id=exc.product_id, message=exc.message)


async def insufficient_stock_handler(request: Request, exc: InsufficientStock) -> JSONResponse:
    return _error(
        409,
        "insufficient_stock",
        product_id=exc.product_id,
        requested=exc.requested,
        available=exc.available,
        message=exc.message,
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, "invalid_argument", messages=exc.messages)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages: dict[str, list[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part != "body") or "body"
        messages.setdefault(field, []).append(err["msg"])
    return _error(400, "invalid_argument", messages=messages)


async def cart_busy_handler(request: Request, exc: CartBusy) -> JSONResponse:
    logger.warning("Cart busy, asking client to retry", owner=exc.owner)
    response = _error(503, "cart_busy", message=str(exc))
    response.headers["Retry-After"] = "1"
    return response


def register_cart_exception_handlers(app: FastAPI) -> None:
    """Install Protean's handlers, then the cart-specific ones on top."""
    register_exception_handlers(app)
    app.add_exception_handler(ProductNotFound, product_not_found_handler)
    app.add_exception_handler(CartItemNotFound, cart_item_not_found_handler)
    app.add_exception_handler(InsufficientStock, insufficient_stock_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(CartBusy, cart_busy_handler)
