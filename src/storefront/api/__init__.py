"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import (
    cart_router,
    notification_router,
    order_router,
    promotion_router,
    shipping_router,
)

__all__ = [
    "order_router",
    "promotion_router",
    "cart_router",
    "shipping_router",
    "notification_router",
    "register_error_handlers",
]
