from ordering.order.coupons import (
    EMPTY_COUPON_MESSAGE,
    INVALID_COUPON_MESSAGE,
    evaluate_coupon,
    normalize_code,
)


def test_normalize_code():
    assert normalize_code("  save10 ") == "SAVE10"
    assert normalize_code(None) == ""


def test_known_code_discounts_ten_percent():
    evaluation = evaluate_coupon("SAVE10", 1000.0)

    assert evaluation.valid is True
    assert evaluation.rate == 0.10
    assert evaluation.discount == 100.0
    assert evaluation.message == "Code promo appliqué : -10%"


def test_code_is_case_insensitive():
    assert evaluate_coupon("save10", 2500.0).discount == 250.0


def test_unknown_code_is_invalid():
    evaluation = evaluate_coupon("INVALID", 1000.0)

    assert evaluation.valid is False
    assert evaluation.discount == 0.0
    assert evaluation.message == INVALID_COUPON_MESSAGE


def test_blank_code():
    evaluation = evaluate_coupon("   ", 1000.0)

    assert evaluation.valid is False
    assert evaluation.message == EMPTY_COUPON_MESSAGE
