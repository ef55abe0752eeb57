"""Storefront API package."""

from storefront.api.errors import register_ordering_error_handlers
from storefront.api.routes import cart_router, order_router, store_router

__all__ = ["order_router", "cart_router", "store_router", "register_ordering_error_handlers"]
