"""Review aggregate: a customer's star rating and text for a product.

A review has no internal states beyond existing or not existing. It is
written once, may be replaced in full, and is removed outright. Files
attached to a review are separate Attachment aggregates that point back at
the review by reference; the review does not hold them.
"""

from datetime import UTC, datetime

from protean import atomic_change
from protean.fields import DateTime, Float, Identifier, String, Text

from reviews.domain import reviews
from reviews.review.errors import MAX_STAR_RATING, MIN_STAR_RATING
from reviews.review.events import ReviewRevised, ReviewWritten


@reviews.aggregate
class Review:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)

    title = String(max_length=200)
    content = Text(required=True)
    star_rating = Float(required=True, min_value=float(MIN_STAR_RATING), max_value=float(MAX_STAR_RATING))

    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def write(cls, product_id, customer_id, content, star_rating, title=None):
        """Write a new review. The identity is assigned here."""
        now = datetime.now(UTC)

        review = cls(
            product_id=product_id,
            customer_id=customer_id,
            title=title,
            content=content,
            star_rating=float(star_rating),
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewWritten(
                review_id=str(review.id),
                product_id=str(product_id),
                customer_id=str(customer_id),
                star_rating=float(star_rating),
                written_at=now,
            )
        )

        return review

    def revise(self, product_id, customer_id, content, star_rating, title=None):
        """Replace every writable field. Identity and created_at are kept."""
        now = datetime.now(UTC)

        with atomic_change(self):
            self.product_id = product_id
            self.customer_id = customer_id
            self.title = title
            self.content = content
            self.star_rating = float(star_rating)
            self.updated_at = now

        self.raise_(
            ReviewRevised(
                review_id=str(self.id),
                product_id=str(product_id),
                star_rating=float(star_rating),
                revised_at=now,
            )
        )
