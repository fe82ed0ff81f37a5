import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def content_bed():
    from content.domain import content

    bed = DomainFixture(content)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(content_bed):
    with content_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
