"""Storefront client: cart, checkout and API access for the MAEVA shop.

``build_storefront`` wires the pieces together from ``StorefrontSettings``.
"""

from storefront.cart import CartLine, CartStore, LineKey
from storefront.cart_page import CartPage
from storefront.checkout import CheckoutSession
from storefront.client import CouponClient, StorefrontClient
from storefront.config import StorefrontSettings
from storefront.storage import storage_from_settings
from storefront.wishlist import Wishlist


def build_storefront(settings: StorefrontSettings | None = None) -> tuple[CartPage, CheckoutSession]:
    """Create a cart page and a checkout session sharing one cart store."""
    settings = settings or StorefrontSettings()
    storage = storage_from_settings(settings)
    store = CartStore.from_settings(settings, storage)
    page = CartPage(store, max_quantity=settings.max_quantity_per_change)
    session = CheckoutSession(
        cart=store,
        client=StorefrontClient.from_settings(settings),
        coupon_client=CouponClient.from_settings(settings),
        storage=storage,
        last_order_key=settings.last_order_key,
    )
    return page, session


__all__ = ["CartLine", "CartStore", "LineKey", "CartPage", "CheckoutSession", "Wishlist", "build_storefront"]
