"""FastAPI application factory for the Storefront API.

Serves one shopper session over HTTP. Each request runs in the storefront
domain context; the session itself pushes the context again when its expiry
timer fires on another thread.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.api.routes import cart_router, catalog_router, checkout_router, order_router
from storefront.domain import storefront


def create_app(session=None) -> FastAPI:
    """Build the API, optionally around an already opened ``Storefront``."""
    app = FastAPI(
        title="Storefront API",
        description="Catalog, cart and time-boxed checkout for a single shopper",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            return await call_next(request)

    register_exception_handlers(app)

    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    app.state.storefront = session
    return app
