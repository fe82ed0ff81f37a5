"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from catalogue.domain import catalogue


@catalogue.event(part_of="Review")
class ReviewPosted:
    """A shopper posted a review on a product."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    posted_at = DateTime(required=True)
