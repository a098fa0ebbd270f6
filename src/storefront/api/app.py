"""FastAPI application factory.

``create_app()`` wires CORS, the per-request domain context, the error
envelope and every router. It does not initialize the domain; callers do
that once (``src/app.py`` for uvicorn, the test session for tests).
"""

import os
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.errors import register_exception_handlers
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context


def _cors_origins() -> list[str]:
    origins = os.environ.get("CORS_ORIGINS", "*")
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


def create_app() -> FastAPI:
    from storefront.catalogue.api import category_router, product_router
    from storefront.discounts.api import router as discount_router
    from storefront.identity.api import auth_router, user_router
    from storefront.ordering.api import router as order_router

    app = FastAPI(
        title="Storefront API",
        description="Catalog browsing, order placement with stock reservation, discount codes",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and tag log lines with a request id."""
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        add_context(request_id=request_id, path=request.url.path)
        try:
            with storefront.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(category_router)
    app.include_router(product_router)
    app.include_router(discount_router)
    app.include_router(order_router)

    @app.get("/health", tags=["health"])
    async def health():
        return {"success": True, "status": "ok"}

    return app
