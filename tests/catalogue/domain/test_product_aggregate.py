"""Tests for the Product aggregate root."""

import json

import pytest
from catalogue.product.events import ProductAdded, ProductUpdated
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields


def _make_product(**overrides):
    defaults = {
        "name": "Karakou Algérois",
        "reference": "KRK-001",
        "description": "Karakou brodé au fil d'or",
        "price": 45000.0,
        "category": "karakou",
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductConstruction:
    def test_element_type(self):
        from protean.utils import DomainObjects

        assert Product.element_type == DomainObjects.AGGREGATE

    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in ("name", "reference", "price", "stock", "colors", "sizes", "promo_price", "rating"):
            assert name in fields

    def test_create_minimal(self):
        product = _make_product()
        assert product.name == "Karakou Algérois"
        assert product.stock == 0
        assert product.promotion is False
        assert product.rating == 0.0
        assert product.review_count == 0
        assert product.color_list() == []

    def test_create_strips_reference_and_category(self):
        product = _make_product(reference="  KRK-002 ", category=" caftan ")
        assert product.reference == "KRK-002"
        assert product.category == "caftan"

    def test_lists_accept_comma_separated_text(self):
        product = _make_product(colors="noir, bordeaux", sizes=["S", "M"])
        assert product.color_list() == ["noir", "bordeaux"]
        assert product.size_list() == ["S", "M"]

    def test_create_raises_product_added(self):
        product = _make_product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.reference == "KRK-001"
        assert event.price == 45000.0

    def test_name_longer_than_100_characters_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(name="x" * 101)

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(price=-1.0)


class TestPromotionRule:
    def test_promo_price_below_price_is_accepted(self):
        product = _make_product(promotion=True, promo_price=39000.0)
        assert product.effective_price() == 39000.0

    def test_promo_price_equal_to_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(promotion=True, promo_price=45000.0)
        assert "promo_price" in exc.value.messages

    def test_promotion_without_promo_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(promotion=True)

    def test_promo_price_ignored_without_promotion(self):
        product = _make_product(promo_price=99999.0)
        assert product.effective_price() == 45000.0

    def test_starting_a_promotion_sets_both_fields_together(self):
        product = _make_product()
        product.update(promotion=True, promo_price=40000.0)
        assert product.promotion is True
        assert product.effective_price() == 40000.0


class TestProductUpdate:
    def test_update_changes_only_given_fields(self):
        product = _make_product(stock=2)
        product._events.clear()

        product.update(price=42000.0, name=None)

        assert product.price == 42000.0
        assert product.name == "Karakou Algérois"
        assert product.stock == 2

    def test_update_raises_event_with_changed_fields(self):
        product = _make_product()
        product._events.clear()

        product.update(stock=5, sizes=["M"])

        event = product._events[-1]
        assert isinstance(event, ProductUpdated)
        assert json.loads(event.changed_fields) == ["stock", "sizes"]

    def test_noop_update_raises_no_event(self):
        product = _make_product()
        product._events.clear()

        product.update(price=45000.0)

        assert product._events == []


class TestSearchAndRating:
    def test_search_matches_name_case_insensitively(self):
        assert _make_product().matches_search("karakou")

    def test_search_matches_reference(self):
        assert _make_product().matches_search("krk-0")

    def test_search_misses(self):
        assert not _make_product().matches_search("burnous")

    def test_record_rating_rounds(self):
        product = _make_product()
        product.record_rating(4.3333333, 3)
        assert product.rating == 4.33
        assert product.review_count == 3
