"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.collection.collection import Collection
from catalogue.collection.events import CollectionCreated, CollectionUpdated
from catalogue.product.events import ProductAdded, ProductUpdated
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_EVENT_CLASSES = {
    "ProductAdded": ProductAdded,
    "ProductUpdated": ProductUpdated,
    "CollectionCreated": CollectionCreated,
    "CollectionUpdated": CollectionUpdated,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a karakou priced at {price:f}"), target_fixture="product")
def karakou_priced_at(price):
    product = Product.create(
        name="Karakou Algérois",
        reference="KRK-001",
        description="Karakou brodé au fil d'or",
        price=price,
        category="karakou",
    )
    product._events.clear()
    return product


@given(parsers.cfparse('a collection named "{name}"'), target_fixture="collection")
def collection_named(name):
    collection = Collection.create(name=name)
    collection._events.clear()
    return collection


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} product event is raised"))
def product_event_raised(product, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in product._events)


@then(parsers.cfparse("a {event_type} collection event is raised"))
def collection_event_raised(collection, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in collection._events)
