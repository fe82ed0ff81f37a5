"""Checkout session: customer form, shipping, coupon, and order submission.

A ``CheckoutSession`` reads the cart it is given, never a global one. It
reports problems the way the checkout page shows them: per-field form errors,
an inline coupon error, and transient notifications. Nothing raised by the
API client escapes ``apply_coupon`` or ``submit``.
"""

import json
import re
import uuid
from dataclasses import dataclass, field
from typing import Literal

import structlog

from shared.schemas import CamelModel
from shared.shipping import DEFAULT_SHIPPING_OPTION_ID, ShippingOption, get_shipping_option
from storefront.cart import CartStore
from storefront.client import CouponClient, CouponServiceError, OrderSubmissionError, StorefrontClient

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

REQUIRED_FIELDS = {
    "name": "Le nom est requis",
    "address": "L'adresse est requise",
    "city": "La ville est requise",
    "contact": "Le numéro de téléphone est requis",
    "email": "L'email est requis",
}
INVALID_EMAIL_MESSAGE = "Format d'email invalide"
FORM_INCOMPLETE_MESSAGE = "Veuillez remplir tous les champs obligatoires"
EMPTY_COUPON_MESSAGE = "Veuillez entrer un code promo"
INVALID_COUPON_MESSAGE = "Code promo invalide ou expiré"
COUPON_APPLIED_MESSAGE = "Code promo appliqué avec succès!"
EMPTY_CART_MESSAGE = "Votre panier est vide"
ORDER_PLACED_MESSAGE = "Commande passée avec succès!"

CONFIRMATION_PATH = "/confirm"
CART_PATH = "/cart"


class CustomerInfo(CamelModel):
    name: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    contact: str = ""
    email: str = ""
    notes: str = ""


def validate_customer(customer: CustomerInfo) -> dict[str, str]:
    """Return a field → message mapping; empty when the form is complete."""
    errors = {}
    for field_name, message in REQUIRED_FIELDS.items():
        if not getattr(customer, field_name).strip():
            errors[field_name] = message
    if "email" not in errors and not EMAIL_PATTERN.search(customer.email):
        errors["email"] = INVALID_EMAIL_MESSAGE
    return errors


class UnknownShippingOption(ValueError):
    pass


@dataclass(frozen=True)
class Notification:
    level: Literal["success", "error"]
    message: str


@dataclass
class CheckoutResult:
    success: bool
    tracking_code: str | None = None
    redirect_to: str | None = None
    message: str | None = None
    errors: dict[str, str] = field(default_factory=dict)


def read_last_order(storage, key: str = "lastOrder") -> dict | None:
    """The confirmation snapshot written by the last successful checkout."""
    try:
        raw = storage.get_item(key)
        return json.loads(raw) if raw else None
    except Exception:
        logger.warning("last_order_load_failed", key=key, exc_info=True)
        return None


class CheckoutSession:
    def __init__(
        self,
        cart: CartStore,
        client: StorefrontClient,
        coupon_client: CouponClient,
        storage,
        last_order_key: str = "lastOrder",
        shipping_option_id: str = DEFAULT_SHIPPING_OPTION_ID,
    ):
        self.cart = cart
        self.client = client
        self.coupon_client = coupon_client
        self.storage = storage
        self.last_order_key = last_order_key

        self.customer = CustomerInfo()
        self.form_errors: dict[str, str] = {}
        self.selected_shipping: ShippingOption = get_shipping_option(shipping_option_id)

        self.coupon_code = ""
        self.applied_coupon: str | None = None
        self.coupon_rate = 0.0
        self.coupon_error: str | None = None
        self.is_applying_coupon = False

        self.is_submitting = False
        self.notifications: list[Notification] = []
        self.idempotency_key = self._new_idempotency_key()

    @staticmethod
    def _new_idempotency_key() -> str:
        return uuid.uuid4().hex

    def _notify(self, level: Literal["success", "error"], message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    # -------------------------------------------------------------------
    # Form
    # -------------------------------------------------------------------
    def update_customer(self, **fields) -> None:
        """Set form fields; an edited field loses its error message."""
        self.customer = self.customer.model_copy(update=fields)
        for field_name in fields:
            self.form_errors.pop(field_name, None)

    def validate_form(self) -> bool:
        self.form_errors = validate_customer(self.customer)
        return not self.form_errors

    def select_shipping(self, option_id: str) -> ShippingOption:
        try:
            self.selected_shipping = get_shipping_option(option_id)
        except KeyError:
            raise UnknownShippingOption(f"Unknown shipping option: {option_id}") from None
        return self.selected_shipping

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    @property
    def subtotal(self) -> float:
        return self.cart.total_price

    @property
    def discount(self) -> float:
        return round(self.subtotal * self.coupon_rate, 2)

    @property
    def shipping_cost(self) -> float:
        return self.selected_shipping.price

    @property
    def total(self) -> float:
        return self.subtotal + self.shipping_cost - self.discount

    async def apply_coupon(self, code: str) -> bool:
        """Check ``code`` with the coupon service; True when a discount now applies."""
        self.coupon_code = code
        if not code.strip():
            self.coupon_error = EMPTY_COUPON_MESSAGE
            return False

        self.is_applying_coupon = True
        self.coupon_error = None
        try:
            result = await self.coupon_client.validate(code.strip(), self.subtotal)
        except CouponServiceError as exc:
            self.coupon_error = exc.message
            return False
        finally:
            self.is_applying_coupon = False

        if not result.valid:
            self.coupon_rate = 0.0
            self.applied_coupon = None
            self.coupon_error = result.message or INVALID_COUPON_MESSAGE
            return False

        self.coupon_rate = result.rate
        self.applied_coupon = result.code
        self._notify("success", COUPON_APPLIED_MESSAGE)
        return True

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def build_payload(self) -> dict:
        items = [
            {
                "productId": line.product_id,
                "name": line.name,
                "price": line.price,
                "quantity": line.quantity,
                "imageUrl": line.image_url,
                "size": line.size,
                "color": line.color,
            }
            for line in self.cart.lines
        ]
        payload = {
            "items": items,
            "customer": self.customer.model_dump(by_alias=True),
            "shipping": {
                "method": self.selected_shipping.name,
                "cost": self.shipping_cost,
                "estimatedDelivery": self.selected_shipping.days,
            },
            "payment": {
                "subtotal": self.subtotal,
                "discount": self.discount,
                "shipping": self.shipping_cost,
                "total": self.total,
            },
        }
        if self.applied_coupon:
            payload["couponCode"] = self.applied_coupon
        return payload

    def submit(self) -> CheckoutResult:
        if self.cart.is_empty():
            self._notify("error", EMPTY_CART_MESSAGE)
            return CheckoutResult(success=False, redirect_to=CART_PATH, message=EMPTY_CART_MESSAGE)

        if not self.validate_form():
            self._notify("error", FORM_INCOMPLETE_MESSAGE)
            return CheckoutResult(success=False, message=FORM_INCOMPLETE_MESSAGE, errors=dict(self.form_errors))

        payload = self.build_payload()
        self.is_submitting = True
        try:
            body = self.client.submit_order(payload, idempotency_key=self.idempotency_key)
        except OrderSubmissionError as exc:
            self._notify("error", exc.message)
            return CheckoutResult(success=False, message=exc.message)
        finally:
            self.is_submitting = False

        tracking_code = body.get("trackingCode")
        self._save_last_order(
            {
                "trackingCode": tracking_code,
                "customer": payload["customer"],
                "shipping": payload["shipping"],
                "payment": payload["payment"],
                "items": payload["items"],
            }
        )
        self.cart.clear()
        self.idempotency_key = self._new_idempotency_key()
        self._notify("success", ORDER_PLACED_MESSAGE)
        logger.info("checkout_completed", tracking_code=tracking_code, total=payload["payment"]["total"])
        return CheckoutResult(success=True, tracking_code=tracking_code, redirect_to=CONFIRMATION_PATH)

    def _save_last_order(self, snapshot: dict) -> None:
        try:
            self.storage.set_item(self.last_order_key, json.dumps(snapshot, ensure_ascii=False))
        except Exception:
            logger.warning("last_order_save_failed", key=self.last_order_key, exc_info=True)
