"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.events import DeliveryStatusChanged, OrderPlaced
from ordering.order.order import Customer, Order, OrderItem, Shipping
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "DeliveryStatusChanged": DeliveryStatusChanged,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(parsers.cfparse("a placed order worth {subtotal:f} shipped by {method}"), target_fixture="order")
def placed_order(subtotal, method):
    order = Order.place(
        items=[OrderItem(product_id="p1", name="Karakou Algérois", price=subtotal, quantity=1)],
        customer=Customer(name="Amina B.", address="12 rue Didouche Mourad", contact="0555123456"),
        shipping=Shipping(method=method, cost=500.0, estimated_delivery="3-5 jours ouvrables"),
    )
    order._events.clear()
    return order


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse('the delivery status is "{status}"'))
def delivery_status_is(order, status):
    assert order.delivery_status == status


@then(parsers.cfparse("a {event_type} order event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in order._events)
