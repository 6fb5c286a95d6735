"""Storefront FastAPI application.

Serves the product catalogue, session carts and order placement over HTTP.
Every request runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.domain import storefront

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - unset: in-memory stores
#   - "production": PostgreSQL at DATABASE_URL
storefront.init()

from storefront.api.errors import register_exception_handlers  # noqa: E402
from storefront.api.routes import cart_router, order_router, product_router  # noqa: E402
from storefront.config import CheckoutSettings, cors_origins  # noqa: E402
from storefront.utils.logging import bind_request_context, clear_request_context  # noqa: E402


def create_app(settings: CheckoutSettings | None = None) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Energy equipment storefront: catalogue, carts and orders",
    )
    app.state.settings = settings or CheckoutSettings.from_env()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and tag log lines with a request id."""
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        bind_request_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        try:
            with storefront.domain_context():
                response = await call_next(request)
            response.headers["x-request-id"] = request_id
            return response
        finally:
            clear_request_context()

    register_exception_handlers(app)

    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return JSONResponse(
            content={"status": "ok", "domain": storefront.name, "timestamp": datetime.now(UTC).isoformat()}
        )

    return app


app = create_app()
