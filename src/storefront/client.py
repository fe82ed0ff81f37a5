"""HTTP clients for the MAEVA API.

``StorefrontClient`` is the synchronous client the pages use for catalogue
reads and order submission. ``CouponClient`` is asynchronous so the checkout
can keep responding while a code is being checked.

Both accept an already-built httpx client, which is how tests point them at
an in-process app or a mock transport.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)

GENERIC_ORDER_ERROR = "Une erreur est survenue lors de la commande."


class StorefrontError(Exception):
    """Base class for failed calls to the MAEVA API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OrderSubmissionError(StorefrontError):
    """The order endpoint answered with an error, or could not be reached."""


class CouponServiceError(StorefrontError):
    """The coupon-validation service could not give an answer."""


def _first_message(value) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, list):
        for entry in value:
            message = _first_message(entry.get("msg") if isinstance(entry, dict) else entry)
            if message:
                return message
    if isinstance(value, dict):
        for entry in value.values():
            message = _first_message(entry)
            if message:
                return message
    return None


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """Pull a human-readable message out of an error response body.

    Looks at ``error``, then ``message``, then ``detail`` (which may be a string,
    a FastAPI validation list or a field→messages mapping).
    """
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    for key in ("error", "message", "detail"):
        message = _first_message(body.get(key))
        if message:
            return message
    return fallback


@dataclass(frozen=True)
class CouponResult:
    code: str
    valid: bool
    rate: float = 0.0
    discount: float = 0.0
    message: str | None = None


class StorefrontClient:
    def __init__(self, base_url: str = "", timeout: float = 30.0, client: httpx.Client | None = None):
        self.http = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings, client: httpx.Client | None = None) -> "StorefrontClient":
        return cls(base_url=settings.api_base_url, timeout=settings.request_timeout, client=client)

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        response = self.http.get(path, params=query, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    # --- Catalogue / content reads ---

    def list_products(self, **filters) -> dict:
        """``filters``: id, category, search, featured, promotion, exclude, limit, page."""
        return self._get("/api/products", filters)

    def get_product(self, product_id: str) -> dict:
        return self._get(f"/api/products/{product_id}")["data"]

    def related_products(self, product: dict, limit: int = 4) -> list[dict]:
        """Other products of the same category, as shown under a product page."""
        body = self.list_products(category=product["category"], exclude=product["id"], limit=limit)
        return body["data"]

    def list_categories(self) -> list[str]:
        return self._get("/api/categories")["data"]

    def list_collections(self, **filters) -> dict:
        return self._get("/api/collection", filters)

    def list_blog_posts(self, **filters) -> dict:
        return self._get("/api/blog", filters)

    def shipping_options(self) -> list[dict]:
        return self._get("/api/shipping-options")["data"]

    def track_order(self, code: str) -> dict:
        return self._get("/api/orders/track", {"code": code})["data"]

    # --- Orders ---

    def submit_order(self, payload: dict, idempotency_key: str | None = None) -> dict:
        """POST the order; return the response body or raise ``OrderSubmissionError``."""
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else {}
        try:
            response = self.http.post("/api/orders", json=payload, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as exc:
            logger.warning("order_submission_unreachable", error=str(exc))
            raise OrderSubmissionError(GENERIC_ORDER_ERROR) from exc

        if response.is_error:
            message = extract_error_message(response, GENERIC_ORDER_ERROR)
            logger.warning("order_submission_rejected", status_code=response.status_code, message=message)
            raise OrderSubmissionError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            logger.warning("order_submission_unreadable", status_code=response.status_code)
            raise OrderSubmissionError(GENERIC_ORDER_ERROR, status_code=response.status_code) from exc

        # A success without a tracking code leaves nothing to confirm.
        if not isinstance(body, dict) or not body.get("trackingCode"):
            logger.warning("order_submission_untracked", status_code=response.status_code)
            raise OrderSubmissionError(GENERIC_ORDER_ERROR, status_code=response.status_code)

        return body


class CouponClient:
    """Asynchronous client for ``POST /api/coupons/validate``."""

    def __init__(self, base_url: str = "", timeout: float = 30.0, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, settings, client: httpx.AsyncClient | None = None) -> "CouponClient":
        return cls(base_url=settings.api_base_url, timeout=settings.request_timeout, client=client)

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        return await client.post("/api/coupons/validate", json=payload, timeout=self.timeout)

    async def validate(self, code: str, subtotal: float) -> CouponResult:
        payload = {"code": code, "subtotal": subtotal}
        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
                    response = await self._post(client, payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("coupon_service_failed", code=code, error=str(exc))
            raise CouponServiceError("Le service de codes promo est indisponible") from exc

        body = response.json()
        return CouponResult(
            code=body["code"],
            valid=body["valid"],
            rate=body.get("rate", 0.0),
            discount=body.get("discount", 0.0),
            message=body.get("message"),
        )
