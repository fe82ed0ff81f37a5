"""Application tests for review posting and rating recomputation."""

import pytest
from catalogue.product.product import Product
from catalogue.review.review import Review
from catalogue.review.submission import PostReview
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain


@pytest.fixture()
def product():
    product = Product.create(
        name="Caftan Tlemcénien",
        reference="CAF-001",
        description="Caftan de mariée",
        price=80000.0,
        category="caftan",
    )
    current_domain.repository_for(Product).add(product)
    return product


def _post(product_id, rating, comment="Magnifique"):
    return current_domain.process(
        PostReview(product_id=product_id, rating=rating, comment=comment),
        asynchronous=False,
    )


class TestPostReview:
    def test_first_review_sets_rating(self, product):
        review_id = _post(product.id, 4)

        assert current_domain.repository_for(Review).get(review_id).user_name == "Utilisateur"
        refreshed = current_domain.repository_for(Product).get(product.id)
        assert refreshed.rating == 4.0
        assert refreshed.review_count == 1

    def test_rating_is_the_mean_of_all_reviews(self, product):
        _post(product.id, 5)
        _post(product.id, 4)
        _post(product.id, 4)

        refreshed = current_domain.repository_for(Product).get(product.id)
        assert refreshed.rating == 4.33
        assert refreshed.review_count == 3

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _post("missing-product", 5)
