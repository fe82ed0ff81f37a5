"""Catalogue domain API package."""

from catalogue.api.routes import category_router, collection_router, product_router, review_router

__all__ = ["product_router", "category_router", "collection_router", "review_router"]
