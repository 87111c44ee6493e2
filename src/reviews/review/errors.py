"""Review error kinds and the star rating bound check.

Each error extends the Protean exception that carries the same meaning, so
callers that already handle ``ValidationError`` / ``ObjectNotFoundError``
keep working, while callers that care can match the specific kind or its
``code``.
"""

from decimal import Decimal, InvalidOperation

from protean.exceptions import ObjectNotFoundError, ValidationError

MIN_STAR_RATING = Decimal("0")
MAX_STAR_RATING = Decimal("5.0")


class InvalidStarRating(ValidationError):
    """Star rating is missing, not a number, or outside [0, 5]."""

    code = "INVALID_STAR_RATING_VALUE"

    def __init__(self, star_rating):
        self.star_rating = star_rating
        super().__init__(
            {"star_rating": [f"Star rating must be between {MIN_STAR_RATING} and {MAX_STAR_RATING}, got {star_rating}"]}
        )


class ReviewNotFound(ObjectNotFoundError):
    """No review exists with the requested identifier."""

    code = "NOT_FOUND_REVIEW"

    def __init__(self, review_id):
        self.review_id = review_id
        super().__init__({"review": [f"Review {review_id} does not exist"]})


class InvalidReviewWriteRequest(ValidationError):
    """The store rejected a review write because of an integrity constraint."""

    code = "INVALID_REVIEW_WRITE_REQUEST"

    def __init__(self, review_id=None):
        self.review_id = review_id
        super().__init__({"review": ["Review could not be written, it conflicts with existing data"]})


def ensure_valid_star_rating(star_rating) -> Decimal:
    """Return the rating as a Decimal, or raise InvalidStarRating."""
    if star_rating is None or isinstance(star_rating, bool):
        raise InvalidStarRating(star_rating)

    try:
        value = Decimal(str(star_rating))
    except InvalidOperation:
        raise InvalidStarRating(star_rating) from None

    if not value.is_finite() or value < MIN_STAR_RATING or value > MAX_STAR_RATING:
        raise InvalidStarRating(star_rating)

    return value
