import httpx
import pytest
from fastapi.testclient import TestClient


def reset_domain_data(domain):
    """Empty every provider and the event store of ``domain``."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()
        domain.event_store.store._data_reset()


@pytest.fixture()
def api():
    """The full MAEVA app, with the catalogue backing order placement."""
    from app import app, catalogue, content, ordering
    from ordering.products import reset_product_directory, set_product_directory
    from ordering.products.catalogue_adapter import CatalogueProductDirectory

    set_product_directory(CatalogueProductDirectory())
    with TestClient(app, base_url="http://maeva.test") as client:
        yield client

    reset_product_directory()
    for domain in (catalogue, content, ordering):
        reset_domain_data(domain)


@pytest.fixture()
def coupon_transport():
    """An ASGI transport to the same app, for the asynchronous coupon client."""
    from app import app

    return httpx.ASGITransport(app=app)
