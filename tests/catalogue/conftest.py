import pytest


@pytest.fixture(scope="session")
def catalogue_domain():
    """The catalogue domain, initialized once with its tables in place."""
    from catalogue.domain import catalogue
    from shared.db import drop_db, setup_db

    catalogue.init()
    setup_db(catalogue)

    yield catalogue

    drop_db(catalogue)


@pytest.fixture(autouse=True)
def run_around_tests(catalogue_domain):
    """Run each test inside the catalogue context and empty the stores afterwards."""
    with catalogue_domain.domain_context():
        yield

        for _, provider in catalogue_domain.providers.items():
            provider._data_reset()
        catalogue_domain.event_store.store._data_reset()
