"""PostReview — attach a review to a product and refresh its rating.

The product must exist; the new mean rating and review count are written back
to the Product aggregate in the same handler.
"""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.review.review import Review, summarize_ratings


@catalogue.command(part_of="Review")
class PostReview:
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    images = Text()  # JSON array of URLs
    user_name = String(max_length=100)


@catalogue.command_handler(part_of=Review)
class PostReviewHandler:
    @handle(PostReview)
    def post_review(self, command):
        product_repo = current_domain.repository_for(Product)
        product = product_repo.get(command.product_id)

        review_repo = current_domain.repository_for(Review)
        earlier = review_repo._dao.query.filter(product_id=str(product.id)).all().items

        review = Review.post(
            product_id=command.product_id,
            rating=command.rating,
            comment=command.comment,
            images=json.loads(command.images) if command.images else None,
            user_name=command.user_name,
        )
        review_repo.add(review)

        rating, count = summarize_ratings([r.rating for r in earlier] + [review.rating])
        product.record_rating(rating, count)
        product_repo.add(product)

        return str(review.id)
