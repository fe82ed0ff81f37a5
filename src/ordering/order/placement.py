"""PlaceOrder — turn a submitted checkout into an Order.

Every line is checked against the catalogue through the product directory, the
subtotal is recomputed from the submitted lines, and the discount comes either
from the coupon code or from the discount the storefront already applied.

A repeated ``idempotency_key`` returns the order created the first time.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.coupons import evaluate_coupon
from ordering.order.order import Customer, Order, OrderItem, Shipping, generate_tracking_code
from ordering.products import get_product_directory
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    items = Text(required=True)  # JSON array of {product_id, name, price, quantity, image_url, size, color}
    customer = Text(required=True)  # JSON object
    shipping = Text(required=True)  # JSON object {method, cost, estimated_delivery}
    coupon_code = String(max_length=50)
    discount = Float(default=0.0)
    idempotency_key = String(max_length=100)


def _find_by_idempotency_key(repo, key):
    if not key:
        return None
    matches = repo._dao.query.filter(idempotency_key=key).all().items
    return matches[0] if matches else None


def _unique_tracking_code(repo):
    while True:
        code = generate_tracking_code()
        if not repo._dao.query.filter(tracking_code=code).all().items:
            return code


def _verified_items(raw_items):
    directory = get_product_directory()
    missing = []
    items = []
    for raw in raw_items:
        product = directory.find(str(raw["product_id"]))
        if product is None:
            missing.append(str(raw["product_id"]))
            continue
        # The submitted price is charged; a drift from the catalogue is only reported.
        if float(raw["price"]) != product.price:
            logger.warning(
                "order_price_mismatch",
                product_id=product.product_id,
                submitted=float(raw["price"]),
                catalogue=product.price,
            )
        image_url = raw.get("image_url") or (product.image_urls[0] if product.image_urls else None)
        items.append(
            OrderItem(
                product_id=product.product_id,
                name=product.name,
                price=raw["price"],
                quantity=raw["quantity"],
                image_url=image_url,
                size=raw.get("size"),
                color=raw.get("color"),
            )
        )
    if missing:
        raise ValidationError({"items": [f"Product not found: {product_id}" for product_id in missing]})
    return items


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(Order)

        existing = _find_by_idempotency_key(repo, command.idempotency_key)
        if existing is not None:
            logger.info(
                "duplicate_order_submission",
                idempotency_key=command.idempotency_key,
                order_id=str(existing.id),
            )
            return str(existing.id)

        raw_items = json.loads(command.items)
        if not raw_items:
            raise ValidationError({"items": ["Cart items are required"]})
        items = _verified_items(raw_items)
        subtotal = sum(item.price * item.quantity for item in items)

        if command.coupon_code:
            evaluation = evaluate_coupon(command.coupon_code, subtotal)
            if not evaluation.valid:
                raise ValidationError({"coupon_code": [evaluation.message]})
            discount, coupon_code = evaluation.discount, evaluation.code
        else:
            discount, coupon_code = command.discount or 0.0, None
            if discount < 0 or discount > subtotal:
                raise ValidationError({"discount": ["Discount must be between 0 and the subtotal"]})

        order = Order.place(
            items=items,
            customer=Customer(**json.loads(command.customer)),
            shipping=Shipping(**json.loads(command.shipping)),
            discount=discount,
            coupon_code=coupon_code,
            idempotency_key=command.idempotency_key,
            tracking_code=_unique_tracking_code(repo),
        )
        repo.add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            tracking_code=order.tracking_code,
            total=order.payment.total,
        )
        return str(order.id)
