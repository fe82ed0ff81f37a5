"""End-to-end checkout: storefront client against the in-process MAEVA app."""

import asyncio

import httpx
import pytest
from storefront.cart import CartStore
from storefront.cart_page import CartPage
from storefront.checkout import CheckoutSession, read_last_order
from storefront.client import CouponClient, StorefrontClient
from storefront.storage import MemoryStorage


@pytest.fixture()
def product(api):
    response = api.post(
        "/api/products",
        json={
            "name": "Karakou Algérois",
            "reference": "KRK-001",
            "description": "Karakou brodé au fil d'or",
            "price": 45000,
            "category": "karakou",
            "imageUrls": ["https://cdn.maeva.dz/krk-001.jpg"],
        },
    )
    return StorefrontClient(client=api).get_product(response.json()["id"])


@pytest.fixture()
def storefront(api, coupon_transport):
    storage = MemoryStorage()
    store = CartStore(storage)
    session = CheckoutSession(
        cart=store,
        client=StorefrontClient(client=api),
        coupon_client=CouponClient(
            client=httpx.AsyncClient(transport=coupon_transport, base_url="http://maeva.test")
        ),
        storage=storage,
    )
    return CartPage(store), session, storage


def test_checkout_places_a_trackable_order(api, product, storefront):
    page, session, storage = storefront
    page.add_to_cart(product_id=product["id"], name=product["name"], price=product["price"], quantity=2, size="M")
    session.update_customer(
        name="Amina B.",
        address="12 rue Didouche Mourad",
        city="Alger",
        contact="0555123456",
        email="amina@example.dz",
    )
    session.select_shipping("express")

    assert asyncio.run(session.apply_coupon("save10")) is True
    result = session.submit()

    assert result.success is True, session.notifications
    assert page.store.is_empty()
    assert read_last_order(storage)["trackingCode"] == result.tracking_code

    tracked = StorefrontClient(client=api).track_order(result.tracking_code)
    assert tracked["payment"] == {"subtotal": 90000.0, "discount": 9000.0, "shipping": 1000.0, "total": 82000.0}
    assert tracked["couponCode"] == "SAVE10"
    assert tracked["items"][0]["imageUrl"] == "https://cdn.maeva.dz/krk-001.jpg"
    assert tracked["progress"] == 0


def test_retry_with_same_key_does_not_duplicate(api, product, storefront):
    page, session, _ = storefront
    page.add_to_cart(product_id=product["id"], name=product["name"], price=product["price"])
    session.update_customer(
        name="Amina B.", address="12 rue Didouche Mourad", city="Alger", contact="0555123456", email="a@b.dz"
    )
    payload = session.build_payload()

    first = session.client.submit_order(payload, idempotency_key="retry-1")
    second = session.client.submit_order(payload, idempotency_key="retry-1")

    assert first["orderId"] == second["orderId"]
    assert len(api.get("/api/orders").json()["data"]) == 1


def test_unknown_product_keeps_cart(api, storefront):
    page, session, storage = storefront
    page.add_to_cart(product_id="ghost", name="Fantôme", price=100.0)
    session.update_customer(
        name="Amina B.", address="12 rue Didouche Mourad", city="Alger", contact="0555123456", email="a@b.dz"
    )

    result = session.submit()

    assert result.success is False
    assert "ghost" in result.message
    assert len(page.store.lines) == 1
    assert read_last_order(storage) is None


def test_health(api):
    body = api.get("/health").json()
    assert set(body["domains"]) == {"catalogue", "content", "ordering"}
