"""Storefront API package."""

from fastapi import FastAPI

from storefront.api.errors import register_error_handlers
from storefront.api.routes import auth_router, cart_router, coupon_router, payment_router, product_router
from storefront.container import Container

ROUTERS = (auth_router, product_router, cart_router, coupon_router, payment_router)


def install(app: FastAPI, container: Container) -> FastAPI:
    """Mount every router on ``app`` and bind it to ``container``."""
    app.state.container = container
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return app


__all__ = ["ROUTERS", "install"]
