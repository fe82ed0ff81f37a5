"""Content domain API package."""

from content.api.contact_routes import contact_router
from content.api.routes import blog_router

__all__ = ["blog_router", "contact_router"]
