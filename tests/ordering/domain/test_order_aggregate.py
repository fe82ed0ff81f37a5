import pytest
from ordering.order.events import DeliveryStatusChanged, OrderPlaced
from ordering.order.order import (
    Customer,
    DeliveryStatus,
    Order,
    OrderItem,
    Payment,
    Shipping,
    allowed_transitions,
    generate_confirmation_code,
    generate_tracking_code,
)
from protean.exceptions import ValidationError


def _customer():
    return Customer(name="Amina B.", address="12 rue Didouche Mourad", city="Alger", contact="0555123456")


def _shipping(cost=500.0):
    return Shipping(method="Livraison standard", cost=cost, estimated_delivery="3-5 jours ouvrables")


def _items():
    return [
        OrderItem(product_id="p1", name="Karakou Algérois", price=500.0, quantity=2),
        OrderItem(product_id="p2", name="Caftan Tlemcénien", price=1200.0, quantity=1, size="M"),
    ]


def _order(**overrides):
    values = {"items": _items(), "customer": _customer(), "shipping": _shipping()}
    values.update(overrides)
    return Order.place(**values)


class TestCodes:
    def test_tracking_code_format(self):
        code = generate_tracking_code()
        assert code.startswith("CMD")
        assert len(code) == 9
        assert code[3:].isdigit()

    def test_confirmation_code_format(self):
        prefix, millis, suffix = generate_confirmation_code().split("-")
        assert prefix == "CONF"
        assert millis.isdigit()
        assert 0 <= int(suffix) <= 999


class TestPlaceOrder:
    def test_payment_is_computed_from_items(self):
        order = _order(discount=100.0)

        assert order.payment.subtotal == 2200.0
        assert order.payment.discount == 100.0
        assert order.payment.shipping == 500.0
        assert order.payment.total == 2600.0

    def test_starts_processing_with_one_timeline_entry(self):
        order = _order()

        assert order.delivery_status == DeliveryStatus.PROCESSING.value
        assert [e.status for e in order.timeline()] == ["processing"]
        assert order.progress() == 0

    def test_raises_order_placed(self):
        order = _order()

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.item_count == 3
        assert event.total == 2700.0

    def test_keeps_supplied_tracking_code(self):
        assert _order(tracking_code="CMD123456").tracking_code == "CMD123456"

    def test_requires_items(self):
        with pytest.raises(ValidationError) as exc:
            _order(items=[])
        assert "items" in exc.value.messages

    def test_payment_must_balance(self):
        with pytest.raises(ValidationError):
            Payment(subtotal=1000.0, discount=0.0, shipping=500.0, total=1000.0)


class TestDeliveryTransitions:
    def test_allowed_transitions_from_processing(self):
        assert allowed_transitions(DeliveryStatus.PROCESSING) == {
            DeliveryStatus.SHIPPED,
            DeliveryStatus.IN_TRANSIT,
            DeliveryStatus.OUT_FOR_DELIVERY,
            DeliveryStatus.DELIVERED,
            DeliveryStatus.CANCELLED,
        }

    def test_terminal_statuses(self):
        assert allowed_transitions(DeliveryStatus.CANCELLED) == set()
        assert allowed_transitions(DeliveryStatus.RETURNED) == set()

    def test_delivered_can_only_be_returned(self):
        assert allowed_transitions(DeliveryStatus.DELIVERED) == {DeliveryStatus.RETURNED}

    def test_forward_move_records_history_and_event(self):
        order = _order()
        order._events.clear()

        order.change_delivery_status("shipped", location="Alger", notes="Remis au transporteur")

        assert order.delivery_status == "shipped"
        assert order.progress() == 25
        latest = order.timeline()[-1]
        assert latest.status == "shipped"
        assert latest.location == "Alger"
        assert isinstance(order._events[0], DeliveryStatusChanged)
        assert order._events[0].previous_status == "processing"

    def test_same_status_is_a_no_op(self):
        order = _order()
        order._events.clear()

        order.change_delivery_status("processing")

        assert len(order.tracking_history) == 1
        assert order._events == []

    def test_backward_move_is_rejected(self):
        order = _order()
        order.change_delivery_status("in_transit")

        with pytest.raises(ValidationError) as exc:
            order.change_delivery_status("shipped")
        assert "delivery_status" in exc.value.messages

    def test_cannot_cancel_once_in_transit(self):
        order = _order()
        order.change_delivery_status("in_transit")

        with pytest.raises(ValidationError):
            order.change_delivery_status("cancelled")

    def test_delivered_order(self):
        order = _order()
        order.change_delivery_status("delivered")

        assert order.is_delivered()
        assert order.progress() == 100

    def test_cancelled_order_has_no_progress(self):
        order = _order()
        order.change_delivery_status("cancelled")

        assert order.is_cancelled()
        assert order.progress() == 0
