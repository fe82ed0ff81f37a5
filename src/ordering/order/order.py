"""Order aggregate (CQRS) — a placed storefront order.

An Order is a snapshot of the shopper's cart, contact details, chosen shipping
and the price breakdown at the moment of checkout. Only the delivery status
moves after placement; everything else is immutable.

Delivery status machine:
    PROCESSING → SHIPPED → IN_TRANSIT → OUT_FOR_DELIVERY → DELIVERED
    Forward skips along that path are allowed.
    PROCESSING | SHIPPED → CANCELLED
    OUT_FOR_DELIVERY | DELIVERED → RETURNED
    CANCELLED, RETURNED → (terminal)
"""

import random
import time
from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering


class DeliveryStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"


# Happy path, in order; tracking progress is measured along it
DELIVERY_PROGRESSION = (
    DeliveryStatus.PROCESSING,
    DeliveryStatus.SHIPPED,
    DeliveryStatus.IN_TRANSIT,
    DeliveryStatus.OUT_FOR_DELIVERY,
    DeliveryStatus.DELIVERED,
)

_CANCELLABLE = {DeliveryStatus.PROCESSING, DeliveryStatus.SHIPPED}
_RETURNABLE = {DeliveryStatus.OUT_FOR_DELIVERY, DeliveryStatus.DELIVERED}


def allowed_transitions(status: DeliveryStatus) -> set[DeliveryStatus]:
    allowed = set()
    if status in DELIVERY_PROGRESSION:
        allowed.update(DELIVERY_PROGRESSION[DELIVERY_PROGRESSION.index(status) + 1 :])
    if status in _CANCELLABLE:
        allowed.add(DeliveryStatus.CANCELLED)
    if status in _RETURNABLE:
        allowed.add(DeliveryStatus.RETURNED)
    return allowed


def generate_tracking_code() -> str:
    return f"CMD{random.randint(100000, 999999)}"


def generate_confirmation_code() -> str:
    return f"CONF-{int(time.time() * 1000)}-{random.randint(0, 999)}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class Customer:
    """Contact and delivery details typed at checkout."""

    name = String(required=True, max_length=100)
    address = String(required=True, max_length=255)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    contact = String(required=True, max_length=50)
    email = String(max_length=254)
    notes = Text()


@ordering.value_object(part_of="Order")
class Shipping:
    method = String(required=True, max_length=100)
    cost = Float(required=True, min_value=0.0)
    estimated_delivery = String(required=True, max_length=100)


@ordering.value_object(part_of="Order")
class Payment:
    """Price breakdown locked at checkout. Amounts are in DZD."""

    subtotal = Float(required=True, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    shipping = Float(default=0.0, min_value=0.0)
    total = Float(required=True)

    @invariant.post
    def total_must_balance(self):
        if self.subtotal is None or self.total is None:
            return
        expected = self.subtotal - (self.discount or 0.0) + (self.shipping or 0.0)
        if abs(self.total - expected) > 0.005:
            raise ValidationError({"total": ["Total must equal subtotal + shipping - discount"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image_url = String(max_length=500)
    size = String(max_length=20)
    color = String(max_length=50)


@ordering.entity(part_of="Order")
class TrackingEvent:
    """One entry of the delivery timeline."""

    status = String(choices=DeliveryStatus, required=True)
    occurred_at = DateTime(required=True)
    location = String(max_length=255)
    notes = Text()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    tracking_code = String(required=True, max_length=20)
    confirmation_code = String(max_length=50)
    idempotency_key = String(max_length=100)
    coupon_code = String(max_length=50)

    items = HasMany(OrderItem)
    customer = ValueObject(Customer, required=True)
    shipping = ValueObject(Shipping, required=True)
    payment = ValueObject(Payment, required=True)

    delivery_status = String(choices=DeliveryStatus, default=DeliveryStatus.PROCESSING.value)
    status_updated_at = DateTime()
    tracking_history = HasMany(TrackingEvent)

    created_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)

    @invariant.post
    def must_contain_items(self):
        if not self.items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

    @classmethod
    def place(
        cls,
        items,
        customer,
        shipping,
        discount=0.0,
        coupon_code=None,
        idempotency_key=None,
        tracking_code=None,
    ):
        """Create an order from verified items.

        ``items`` are ``OrderItem`` entities; the subtotal is computed from
        them, never taken from the caller.
        """
        from ordering.order.events import OrderPlaced

        subtotal = round(sum(item.price * item.quantity for item in items), 2)
        payment = Payment(
            subtotal=subtotal,
            discount=discount,
            shipping=shipping.cost,
            total=round(subtotal - discount + shipping.cost, 2),
        )
        now = datetime.now()

        order = cls(
            tracking_code=tracking_code or generate_tracking_code(),
            confirmation_code=generate_confirmation_code(),
            idempotency_key=idempotency_key,
            coupon_code=coupon_code,
            items=items,
            customer=customer,
            shipping=shipping,
            payment=payment,
            delivery_status=DeliveryStatus.PROCESSING.value,
            status_updated_at=now,
            tracking_history=[TrackingEvent(status=DeliveryStatus.PROCESSING.value, occurred_at=now)],
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                tracking_code=order.tracking_code,
                customer_name=customer.name,
                item_count=sum(item.quantity for item in items),
                subtotal=payment.subtotal,
                discount=payment.discount,
                shipping_cost=payment.shipping,
                total=payment.total,
                placed_at=now,
            )
        )
        return order

    def change_delivery_status(self, new_status, location=None, notes=None):
        from ordering.order.events import DeliveryStatusChanged

        target = DeliveryStatus(new_status)
        current = DeliveryStatus(self.delivery_status)
        if target == current:
            return
        if target not in allowed_transitions(current):
            raise ValidationError(
                {"delivery_status": [f"Cannot move an order from {current.value} to {target.value}"]}
            )

        now = datetime.now()
        self.delivery_status = target.value
        self.status_updated_at = now
        self.updated_at = now
        self.add_tracking_history(
            TrackingEvent(status=target.value, occurred_at=now, location=location, notes=notes)
        )
        self.raise_(
            DeliveryStatusChanged(
                order_id=self.id,
                tracking_code=self.tracking_code,
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def progress(self) -> int:
        """Percentage of the delivery path covered; 0 off the happy path."""
        status = DeliveryStatus(self.delivery_status)
        if status not in DELIVERY_PROGRESSION:
            return 0
        return round(DELIVERY_PROGRESSION.index(status) / (len(DELIVERY_PROGRESSION) - 1) * 100)

    def is_delivered(self) -> bool:
        return self.delivery_status == DeliveryStatus.DELIVERED.value

    def is_cancelled(self) -> bool:
        return self.delivery_status == DeliveryStatus.CANCELLED.value

    def timeline(self):
        return sorted(self.tracking_history, key=lambda event: event.occurred_at)
