"""Storefront FastAPI application.

Web server that processes commands synchronously via HTTP. Every request runs
inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.api import install
from storefront.container import Container
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, get_logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied.
storefront.init()

logger = get_logger(__name__)


def create_app(container: Container | None = None) -> FastAPI:
    container = container or Container.build()

    app = FastAPI(
        title="Storefront API",
        description="E-commerce storefront: accounts, catalogue, cart, coupons and checkout",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[container.settings.client_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and tag log lines with the request."""
        add_context(request_id=request.headers.get("x-request-id", uuid.uuid4().hex), path=request.url.path)
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    install(app, container)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": storefront.name,
                "env": container.settings.env,
            }
        )

    logger.info("app_created", env=container.settings.env, gateway=type(container.gateway).__name__)
    return app


app = create_app()
