"""Tests for Review aggregate creation, revision and raised events."""

import pytest
from protean.exceptions import ValidationError
from reviews.review.events import ReviewRevised, ReviewWritten
from reviews.review.review import Review


def _write(**overrides):
    defaults = {
        "product_id": "100",
        "customer_id": "cust-001",
        "title": "Solid purchase",
        "content": "Does what it says, arrived on time.",
        "star_rating": 4.5,
    }
    defaults.update(overrides)
    return Review.write(**defaults)


class TestReviewWrite:
    def test_write_assigns_identity(self):
        review = _write()
        assert review.id is not None

    def test_write_sets_fields(self):
        review = _write()
        assert str(review.product_id) == "100"
        assert str(review.customer_id) == "cust-001"
        assert review.title == "Solid purchase"
        assert review.content == "Does what it says, arrived on time."
        assert review.star_rating == 4.5

    def test_write_sets_timestamps(self):
        review = _write()
        assert review.created_at is not None
        assert review.updated_at == review.created_at

    def test_title_is_optional(self):
        review = _write(title=None)
        assert review.title is None

    def test_content_is_required(self):
        with pytest.raises(ValidationError):
            _write(content=None)

    def test_rating_above_five_rejected_by_field(self):
        with pytest.raises(ValidationError):
            _write(star_rating=5.5)

    def test_write_raises_review_written(self):
        review = _write()
        event = review._events[-1]
        assert isinstance(event, ReviewWritten)
        assert event.review_id == str(review.id)
        assert event.star_rating == 4.5


class TestReviewRevise:
    def test_revise_replaces_fields(self):
        review = _write(star_rating=3.0)
        review.revise(
            product_id="100",
            customer_id="cust-001",
            title=None,
            content="Changed my mind, it grew on me.",
            star_rating=4.0,
        )
        assert review.star_rating == 4.0
        assert review.title is None
        assert review.content == "Changed my mind, it grew on me."

    def test_revise_keeps_identity_and_creation_time(self):
        review = _write()
        review_id, created_at = review.id, review.created_at
        review.revise(product_id="100", customer_id="cust-001", content="Edited.", star_rating=2)
        assert review.id == review_id
        assert review.created_at == created_at
        assert review.updated_at >= created_at

    def test_revise_raises_review_revised(self):
        review = _write()
        review.revise(product_id="100", customer_id="cust-001", content="Edited.", star_rating=2)
        event = review._events[-1]
        assert isinstance(event, ReviewRevised)
        assert event.star_rating == 2.0
