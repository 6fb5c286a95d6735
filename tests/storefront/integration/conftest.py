import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api.errors import register_exception_handlers
from storefront.api.routes import cart_router, order_router, product_router


@pytest.fixture()
def client(settings):
    app = FastAPI()
    app.state.settings = settings
    register_exception_handlers(app)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    return TestClient(app)
