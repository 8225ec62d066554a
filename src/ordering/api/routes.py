"""FastAPI routes for the cart.

The cart is always the caller's own: the owner comes from the verified
bearer token, never from the path or body.
"""

from fastapi import APIRouter, Depends

from ordering.api.identity import Principal, current_principal
from ordering.api.schemas import AddCartItemRequest, CartResponse, UpdateCartItemRequest
from ordering.cart import service

cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    return CartResponse(**service.get_cart(principal.user_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(
    body: AddCartItemRequest,
    principal: Principal = Depends(current_principal),
) -> CartResponse:
    cart = service.add_item(principal.user_id, body.product_id, body.quantity)
    return CartResponse(**cart)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    principal: Principal = Depends(current_principal),
) -> CartResponse:
    cart = service.update_item(principal.user_id, product_id, body.quantity)
    return CartResponse(**cart)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, principal: Principal = Depends(current_principal)) -> CartResponse:
    return CartResponse(**service.remove_item(principal.user_id, product_id))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    return CartResponse(**service.clear_cart(principal.user_id))
