import pytest
from storefront.cart import CartLine, CartStore
from storefront.storage import MemoryStorage


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def store(storage):
    return CartStore(storage)


@pytest.fixture()
def karakou():
    return CartLine(
        product_id="p1",
        name="Karakou Algérois",
        price=500.0,
        quantity=1,
        image_url="https://cdn/p1.jpg",
        color="bordeaux",
        size="M",
    )
