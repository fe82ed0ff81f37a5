"""Coupon evaluation.

A single promotional code exists today. Codes are matched case-insensitively
and discount a percentage of the cart subtotal (shipping excluded).
"""

from dataclasses import dataclass

KNOWN_COUPONS: dict[str, float] = {
    "SAVE10": 0.10,
}

INVALID_COUPON_MESSAGE = "Code promo invalide ou expiré"
EMPTY_COUPON_MESSAGE = "Veuillez entrer un code promo"


@dataclass(frozen=True)
class CouponEvaluation:
    code: str
    valid: bool
    rate: float = 0.0
    discount: float = 0.0
    message: str | None = None


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def evaluate_coupon(code: str | None, subtotal: float) -> CouponEvaluation:
    """Price ``code`` against ``subtotal``. Unknown or blank codes are not errors."""
    normalized = normalize_code(code)
    if not normalized:
        return CouponEvaluation(code=normalized, valid=False, message=EMPTY_COUPON_MESSAGE)

    rate = KNOWN_COUPONS.get(normalized)
    if rate is None:
        return CouponEvaluation(code=normalized, valid=False, message=INVALID_COUPON_MESSAGE)

    discount = round(subtotal * rate, 2)
    return CouponEvaluation(
        code=normalized,
        valid=True,
        rate=rate,
        discount=discount,
        message=f"Code promo appliqué : -{int(rate * 100)}%",
    )
