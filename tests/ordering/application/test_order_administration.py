import json

import pytest
from ordering.order.administration import RemoveOrder, UpdateDeliveryStatus
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


@pytest.fixture()
def order_id():
    command = PlaceOrder(
        items=json.dumps([{"product_id": "p1", "name": "Karakou", "price": 500.0, "quantity": 1}]),
        customer=json.dumps({"name": "Amina B.", "address": "12 rue Didouche Mourad", "contact": "0555123456"}),
        shipping=json.dumps({"method": "Livraison express", "cost": 1000.0, "estimated_delivery": "1-2 jours"}),
    )
    return current_domain.process(command, asynchronous=False)


def _status(order_id, status, **extra):
    current_domain.process(UpdateDeliveryStatus(order_id=order_id, delivery_status=status, **extra), asynchronous=False)


class TestUpdateDeliveryStatus:
    def test_moves_order_forward(self, order_id):
        _status(order_id, "shipped", location="Alger")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.delivery_status == "shipped"
        assert [e.status for e in order.timeline()] == ["processing", "shipped"]

    def test_full_delivery(self, order_id):
        for status in ("shipped", "in_transit", "out_for_delivery", "delivered"):
            _status(order_id, status)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.is_delivered()
        assert len(order.tracking_history) == 5

    def test_invalid_transition(self, order_id):
        _status(order_id, "cancelled")

        with pytest.raises(ValidationError):
            _status(order_id, "shipped")

    def test_unknown_status_is_rejected(self, order_id):
        with pytest.raises(ValidationError):
            _status(order_id, "lost")


class TestRemoveOrder:
    def test_deletes_order(self, order_id):
        current_domain.process(RemoveOrder(order_id=order_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Order).get(order_id)
