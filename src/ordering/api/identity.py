"""Edge identity: bearer-token verification for the cart API.

Tokens are issued by the identity service. This module only verifies them
and turns the claims into a ``Principal`` whose user id is passed explicitly
to every cart operation.
"""

import os

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from ordering.utils.logging import add_context

bearer_scheme = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    user_id: str
    is_admin: bool = False

    model_config = {"frozen": True}


def _token_settings() -> tuple[str, str]:
    return (
        os.getenv("TOKEN_SECRET", "dev-secret-change-me"),
        os.getenv("TOKEN_ALGORITHM", "HS256"),
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_principal(token: str) -> Principal:
    """Verify ``token`` and build the principal from its claims.

    The user id is read from ``userId``, falling back to the standard ``sub``.
    """
    secret, algorithm = _token_settings()
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        raise _unauthorized("Could not validate credentials") from exc

    user_id = claims.get("userId") or claims.get("sub")
    if not user_id:
        raise _unauthorized("Token carries no user id")
    return Principal(user_id=str(user_id), is_admin=bool(claims.get("isAdmin", False)))


def current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    """FastAPI dependency: the authenticated caller, or 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")

    principal = decode_principal(credentials.credentials)
    add_context(user_id=principal.user_id)
    return principal
