"""Review aggregate — a shopper's rating and comment on a product.

Reviews are append-only: once posted they are never edited. The product's
``rating`` and ``review_count`` are derived from the full set of reviews and
recomputed whenever a new one arrives.
"""

import json
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from catalogue.domain import catalogue

DEFAULT_USER_NAME = "Utilisateur"


@catalogue.aggregate
class Review:
    product_id = Identifier(required=True)
    user_name = String(max_length=100, default=DEFAULT_USER_NAME)
    rating = Integer(required=True)
    comment = Text(required=True)
    images = Text()  # JSON array of URLs
    created_at = DateTime(default=datetime.now)

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None and (self.rating < 1 or self.rating > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

    @classmethod
    def post(cls, product_id, rating, comment, images=None, user_name=None):
        from catalogue.review.events import ReviewPosted

        review = cls(
            product_id=product_id,
            user_name=user_name or DEFAULT_USER_NAME,
            rating=rating,
            comment=comment,
            images=json.dumps(images or []),
            created_at=datetime.now(),
        )
        review.raise_(
            ReviewPosted(
                review_id=review.id,
                product_id=product_id,
                rating=rating,
                posted_at=review.created_at,
            )
        )
        return review

    def image_list(self):
        return json.loads(self.images) if self.images else []


def summarize_ratings(ratings):
    """Return ``(mean, count)`` for a sequence of star ratings."""
    ratings = list(ratings)
    if not ratings:
        return 0.0, 0
    return sum(ratings) / len(ratings), len(ratings)
