import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import cart_router, order_router, register_ordering_error_handlers, store_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(cart_router)
    app.include_router(store_router)
    register_exception_handlers(app)
    register_ordering_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def customer_headers():
    return {"X-User-Id": "user-001"}


@pytest.fixture()
def member_headers():
    return {"X-User-Id": "user-001", "X-User-Plans": "plus"}
