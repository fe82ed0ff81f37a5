import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture(autouse=True)
def products():
    """A product directory holding two garments; restored after each test."""
    from ordering.products import reset_product_directory, set_product_directory
    from ordering.products.fake_adapter import FakeProductDirectory
    from ordering.products.port import ProductSnapshot

    directory = FakeProductDirectory(
        [
            ProductSnapshot(product_id="p1", name="Karakou Algérois", price=500.0, image_urls=["https://cdn/p1.jpg"]),
            ProductSnapshot(product_id="p2", name="Caftan Tlemcénien", price=1200.0),
        ]
    )
    set_product_directory(directory)
    yield directory
    reset_product_directory()
