"""FastAPI application factory.

``create_app`` expects the three domains to be initialized already; the
``app`` module does that once per process and tests do it through their
domain fixtures.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from identity.api import router as identity_router
from identity.domain import identity
from inventory.api import product_router
from inventory.domain import inventory
from ordering.api import cart_router
from ordering.domain import ordering
from shared.config import get_settings
from shared.logging import add_context, clear_context, configure_logging, get_logger
from storefront.context import Storefront
from storefront.web import register_error_handlers

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/accounts": identity,
    "/products": inventory,
    "/cart": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


def create_app(storefront: Storefront | None = None, configure_logs: bool = True) -> FastAPI:
    if configure_logs:
        configure_logging()

    app = FastAPI(
        title="Tindahan API",
        description="Marketplace core: catalog, cart and checkout",
    )
    app.state.storefront = storefront or Storefront()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the request's Protean domain context and bind its logging context."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        try:
            domain = _resolve_domain(request.url.path)
            if domain is not None:
                with domain.domain_context():
                    return await call_next(request)
            return await call_next(request)
        finally:
            clear_context()

    register_error_handlers(app)

    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(cart_router)

    @app.get("/health")
    async def health():
        store = app.state.storefront
        return JSONResponse(
            content={
                "status": "ok",
                "environment": get_settings().environment,
                "domains": {domain.name: {"name": domain.name} for domain in (identity, inventory, ordering)},
                "products": len(store.ledger),
                "cart_lines": store.cart.count,
            }
        )

    logger.info("app_created", environment=get_settings().environment)
    return app
