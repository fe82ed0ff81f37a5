"""Pydantic request/response schemas for the Ordering API.

Field names are snake_case in Python and camelCase on the wire, matching the
payload the storefront checkout assembles.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel

# --- Request Schemas ---


class OrderItemPayload(CamelModel):
    product_id: str
    name: str = Field(..., max_length=100)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image_url: str | None = None
    size: str | None = None
    color: str | None = None


class CustomerPayload(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    city: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    contact: str = Field(..., min_length=1, max_length=50)
    email: str | None = Field(None, max_length=254)
    notes: str | None = None


class ShippingPayload(CamelModel):
    method: str = Field(..., min_length=1, max_length=100)
    cost: float = Field(..., ge=0)
    estimated_delivery: str = Field(..., min_length=1, max_length=100)


class PaymentPayload(CamelModel):
    subtotal: float = Field(..., ge=0)
    discount: float = Field(0.0, ge=0)
    shipping: float = Field(0.0, ge=0)
    total: float


class PlaceOrderRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "productId": "a4c1f0e2-7a1b-4f7e-9a55-1c2d3e4f5a6b",
                            "name": "Karakou Algérois",
                            "price": 45000,
                            "quantity": 1,
                            "size": "M",
                            "color": "bordeaux",
                        }
                    ],
                    "customer": {
                        "name": "Amina B.",
                        "address": "12 rue Didouche Mourad",
                        "city": "Alger",
                        "contact": "0555 12 34 56",
                        "email": "amina@example.dz",
                    },
                    "shipping": {
                        "method": "Livraison standard",
                        "cost": 500,
                        "estimatedDelivery": "3-5 jours ouvrables",
                    },
                    "payment": {"subtotal": 45000, "discount": 0, "shipping": 500, "total": 45500},
                }
            ]
        }
    }

    items: list[OrderItemPayload] = Field(..., min_length=1)
    customer: CustomerPayload
    shipping: ShippingPayload
    payment: PaymentPayload | None = None
    coupon_code: str | None = Field(None, max_length=50)
    coupon_discount: float | None = Field(None, ge=0)

    def submitted_discount(self) -> float:
        if self.coupon_discount is not None:
            return self.coupon_discount
        return self.payment.discount if self.payment else 0.0


class UpdateDeliveryStatusRequest(CamelModel):
    delivery_status: str
    location: str | None = Field(None, max_length=255)
    notes: str | None = None


class ValidateCouponRequest(CamelModel):
    code: str = ""
    subtotal: float = Field(0.0, ge=0)


# --- Response Schemas ---


class OrderItemResponse(CamelModel):
    product_id: str
    name: str
    price: float
    quantity: int
    image_url: str | None = None
    size: str | None = None
    color: str | None = None


class CustomerResponse(CamelModel):
    name: str
    address: str
    city: str | None = None
    postal_code: str | None = None
    contact: str
    email: str | None = None
    notes: str | None = None


class ShippingResponse(CamelModel):
    method: str
    cost: float
    estimated_delivery: str


class PaymentResponse(CamelModel):
    subtotal: float
    discount: float
    shipping: float
    total: float


class TrackingEventResponse(CamelModel):
    status: str
    date: datetime
    location: str | None = None
    notes: str | None = None


class OrderResponse(CamelModel):
    id: str
    tracking_code: str
    confirmation_code: str | None = None
    coupon_code: str | None = None
    items: list[OrderItemResponse]
    customer: CustomerResponse
    shipping: ShippingResponse
    payment: PaymentResponse
    delivery_status: str
    status_updated_at: datetime | None = None
    tracking_history: list[TrackingEventResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        return cls(**cls.fields_from_order(order))

    @staticmethod
    def fields_from_order(order) -> dict:
        return dict(
            id=str(order.id),
            tracking_code=order.tracking_code,
            confirmation_code=order.confirmation_code,
            coupon_code=order.coupon_code,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    image_url=item.image_url,
                    size=item.size,
                    color=item.color,
                )
                for item in order.items
            ],
            customer=CustomerResponse(
                name=order.customer.name,
                address=order.customer.address,
                city=order.customer.city,
                postal_code=order.customer.postal_code,
                contact=order.customer.contact,
                email=order.customer.email,
                notes=order.customer.notes,
            ),
            shipping=ShippingResponse(
                method=order.shipping.method,
                cost=order.shipping.cost,
                estimated_delivery=order.shipping.estimated_delivery,
            ),
            payment=PaymentResponse(
                subtotal=order.payment.subtotal,
                discount=order.payment.discount or 0.0,
                shipping=order.payment.shipping or 0.0,
                total=order.payment.total,
            ),
            delivery_status=order.delivery_status,
            status_updated_at=order.status_updated_at,
            tracking_history=[
                TrackingEventResponse(
                    status=event.status,
                    date=event.occurred_at,
                    location=event.location,
                    notes=event.notes,
                )
                for event in order.timeline()
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class TrackedOrderResponse(OrderResponse):
    progress: int
    is_delivered: bool
    is_cancelled: bool
    estimated_delivery: str

    @classmethod
    def from_order(cls, order) -> TrackedOrderResponse:
        return cls(
            **cls.fields_from_order(order),
            progress=order.progress(),
            is_delivered=order.is_delivered(),
            is_cancelled=order.is_cancelled(),
            estimated_delivery=order.shipping.estimated_delivery,
        )


class PlaceOrderResponse(CamelModel):
    success: bool = True
    message: str = "Order created successfully"
    order_id: str
    tracking_code: str
    data: OrderResponse


class OrderEnvelope(CamelModel):
    success: bool = True
    data: OrderResponse


class OrderListResponse(CamelModel):
    success: bool = True
    message: str = "Orders retrieved successfully"
    data: list[OrderResponse]


class TrackOrderResponse(CamelModel):
    success: bool = True
    data: TrackedOrderResponse


class CouponResponse(CamelModel):
    code: str
    valid: bool
    rate: float
    discount: float
    message: str | None = None


class ShippingOptionResponse(CamelModel):
    id: str
    name: str
    price: float
    days: str


class ShippingOptionsResponse(CamelModel):
    success: bool = True
    data: list[ShippingOptionResponse]
    default: str
