"""MAEVA FastAPI application.

Serves the catalogue, content and ordering domains from one process. Each
request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
from catalogue.domain import catalogue  # noqa: E402
from content.domain import content  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering  # noqa: E402
from ordering.products import set_product_directory
from ordering.products.catalogue_adapter import CatalogueProductDirectory
from protean.integrations.fastapi import register_exception_handlers
from shared.logging import configure_logging
from shared.settings import ServerSettings

# Routers are imported before ``init()`` so domain traversal does not re-enter
# the ``*.api`` packages mid-import (a circular import between a package
# ``__init__`` and its route modules, depending on directory listing order).
from catalogue.api import category_router, collection_router, product_router, review_router
from content.api import blog_router, contact_router
from ordering.api import coupon_router, order_router, shipping_router

catalogue.init()
content.init()
ordering.init()

# Orders look products up in the catalogue served by this same process
set_product_directory(CatalogueProductDirectory())

settings = ServerSettings()
configure_logging(log_dir=settings.log_dir, force=True)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/api/products": catalogue,
    "/api/collection": catalogue,
    "/api/reviews": catalogue,
    "/api/categories": catalogue,
    "/api/blog": content,
    "/api/contact": content,
    "/api/orders": ordering,
    "/api/coupons": ordering,
    "/api/shipping-options": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.title,
    description="MAEVA storefront — Catalogue, Content & Ordering domains",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: health check and docs pass through
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(product_router)
app.include_router(collection_router)
app.include_router(review_router)
app.include_router(category_router)
app.include_router(blog_router)
app.include_router(contact_router)
app.include_router(order_router)
app.include_router(coupon_router)
app.include_router(shipping_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "catalogue": {"name": catalogue.name},
                "content": {"name": content.name},
                "ordering": {"name": ordering.name},
            },
        }
    )
