"""FastAPI routes for the Ordering domain.

Order placement and back-office updates go through commands; tracking,
coupon validation and shipping options are read-only.
"""

import json

from fastapi import APIRouter, Header, HTTPException, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    CouponResponse,
    OrderEnvelope,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ShippingOptionResponse,
    ShippingOptionsResponse,
    TrackedOrderResponse,
    TrackOrderResponse,
    UpdateDeliveryStatusRequest,
    ValidateCouponRequest,
)
from ordering.order.administration import RemoveOrder, UpdateDeliveryStatus
from ordering.order.coupons import evaluate_coupon
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from shared.schemas import StatusResponse
from shared.shipping import DEFAULT_SHIPPING_OPTION_ID, SHIPPING_OPTIONS

order_router = APIRouter(prefix="/api/orders", tags=["orders"])
coupon_router = APIRouter(prefix="/api/coupons", tags=["coupons"])
shipping_router = APIRouter(prefix="/api/shipping-options", tags=["shipping"])


def _order_or_404(order_id):
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")


def _order_by_tracking_code_or_404(code):
    repo = current_domain.repository_for(Order)
    matches = repo._dao.query.filter(tracking_code=code.strip().upper()).all().items
    if not matches:
        raise HTTPException(status_code=404, detail="Commande non trouvée")
    return matches[0]


# --- Orders ---


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    idempotency_key: str | None = Header(None),
) -> PlaceOrderResponse:
    command = PlaceOrder(
        items=json.dumps([item.model_dump() for item in body.items]),
        customer=json.dumps(body.customer.model_dump()),
        shipping=json.dumps(body.shipping.model_dump()),
        coupon_code=body.coupon_code or None,
        discount=body.submitted_discount(),
        idempotency_key=idempotency_key,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return PlaceOrderResponse(
        order_id=order_id,
        tracking_code=order.tracking_code,
        data=OrderResponse.from_order(order),
    )


@order_router.get("", response_model=OrderListResponse | OrderEnvelope)
async def list_orders(
    id: str | None = None,
    tracking_code: str | None = Query(None, alias="trackingCode"),
):
    """All orders, newest first, or a single one by ``id`` or ``trackingCode``."""
    if id:
        return OrderEnvelope(data=OrderResponse.from_order(_order_or_404(id)))
    if tracking_code:
        return OrderEnvelope(data=OrderResponse.from_order(_order_by_tracking_code_or_404(tracking_code)))

    orders = current_domain.repository_for(Order)._dao.query.all().items
    orders.sort(key=lambda o: o.created_at, reverse=True)
    return OrderListResponse(data=[OrderResponse.from_order(o) for o in orders])


@order_router.get("/track", response_model=TrackOrderResponse)
async def track_order(code: str = Query("")) -> TrackOrderResponse:
    """Public tracking lookup with delivery progress."""
    if not code.strip():
        raise HTTPException(status_code=400, detail="Le code de suivi est requis")
    order = _order_by_tracking_code_or_404(code)
    return TrackOrderResponse(data=TrackedOrderResponse.from_order(order))


@order_router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(order_id: str) -> OrderEnvelope:
    return OrderEnvelope(data=OrderResponse.from_order(_order_or_404(order_id)))


@order_router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_delivery_status(order_id: str, body: UpdateDeliveryStatusRequest) -> OrderEnvelope:
    _order_or_404(order_id)
    command = UpdateDeliveryStatus(
        order_id=order_id,
        delivery_status=body.delivery_status,
        location=body.location,
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return OrderEnvelope(data=OrderResponse.from_order(current_domain.repository_for(Order).get(order_id)))


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def remove_order(order_id: str) -> StatusResponse:
    _order_or_404(order_id)
    current_domain.process(RemoveOrder(order_id=order_id), asynchronous=False)
    return StatusResponse(message="Order deleted successfully")


# --- Coupons ---


@coupon_router.post("/validate", response_model=CouponResponse)
async def validate_coupon(body: ValidateCouponRequest) -> CouponResponse:
    evaluation = evaluate_coupon(body.code, body.subtotal)
    return CouponResponse(
        code=evaluation.code,
        valid=evaluation.valid,
        rate=evaluation.rate,
        discount=evaluation.discount,
        message=evaluation.message,
    )


# --- Shipping ---


@shipping_router.get("", response_model=ShippingOptionsResponse)
async def list_shipping_options() -> ShippingOptionsResponse:
    return ShippingOptionsResponse(
        data=[ShippingOptionResponse(**option.to_dict()) for option in SHIPPING_OPTIONS],
        default=DEFAULT_SHIPPING_OPTION_ID,
    )
