import pytest
from storefront.cart import QuantityOutOfRange
from storefront.cart_page import CartPage


@pytest.fixture()
def page(store):
    return CartPage(store)


def _add(page, **overrides):
    values = {"product_id": "p1", "name": "Karakou Algérois", "price": 500.0, "color": "bordeaux", "size": "M"}
    values.update(overrides)
    return page.add_to_cart(**values)


class TestCartPage:
    def test_add_to_cart(self, page):
        line = _add(page, quantity=2)

        assert line.quantity == 2
        assert page.summary()["totalItems"] == 2
        assert page.summary()["totalPrice"] == 1000.0

    @pytest.mark.parametrize("quantity", [0, -3, 21])
    def test_rejects_out_of_range_quantities(self, page, quantity):
        line = _add(page)

        with pytest.raises(QuantityOutOfRange):
            page.change_quantity(line.key, quantity)
        assert page.store.total_items == 1

    def test_accepts_the_cap(self, page):
        line = _add(page)

        assert page.change_quantity(line.key, 20) is True
        assert page.store.total_items == 20

    def test_custom_cap(self, store):
        page = CartPage(store, max_quantity=5)
        line = _add(page)

        with pytest.raises(QuantityOutOfRange):
            page.change_quantity(line.key, 6)

    def test_increment_and_decrement(self, page):
        line = _add(page)

        page.increment(line.key)
        page.increment(line.key)
        page.decrement(line.key)

        assert page.store.line_for(line.key).quantity == 2

    def test_decrement_below_one_is_refused(self, page):
        line = _add(page)

        with pytest.raises(QuantityOutOfRange):
            page.decrement(line.key)

    def test_remove_and_clear(self, page):
        first = _add(page)
        _add(page, product_id="p2", name="Caftan")

        page.remove(first.key)
        assert [line["productId"] for line in page.summary()["lines"]] == ["p2"]

        page.clear()
        assert page.store.is_empty()
