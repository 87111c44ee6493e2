"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Float, Identifier

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewWritten:
    """A customer wrote a new product review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    star_rating = Float(required=True)
    written_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewRevised:
    """An existing review was replaced with new content and rating."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    star_rating = Float(required=True)
    revised_at = DateTime(required=True)
