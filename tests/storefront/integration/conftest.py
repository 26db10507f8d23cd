import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import (
    cart_router,
    notification_router,
    order_router,
    promotion_router,
    register_error_handlers,
    shipping_router,
)


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(promotion_router)
    app.include_router(cart_router)
    app.include_router(shipping_router)
    app.include_router(notification_router)
    register_error_handlers(app)
    return TestClient(app)
