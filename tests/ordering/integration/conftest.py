import os
import time

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from ordering.api.errors import register_cart_exception_handlers
from ordering.api.routes import cart_router


def make_token(user_id="usr-api-001", is_admin=False, secret=None, **claims):
    payload = {"userId": user_id, "isAdmin": is_admin, "exp": int(time.time()) + 600, **claims}
    return jwt.encode(payload, secret or os.environ["TOKEN_SECRET"], algorithm="HS256")


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    register_cart_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def auth():
    def _auth(user_id="usr-api-001", **kwargs):
        return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}

    return _auth


@pytest.fixture()
def token():
    return make_token
