"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A shopper completed checkout and an order was recorded."""

    __version__ = 1

    order_id = Identifier(required=True)
    tracking_code = String(required=True)
    customer_name = String(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    discount = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class DeliveryStatusChanged:
    """The shop moved an order along its delivery timeline."""

    __version__ = 1

    order_id = Identifier(required=True)
    tracking_code = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
