"""Shared BDD fixtures and step definitions for the review lifecycle."""

import pytest
from pytest_bdd import parsers, then
from reviews.attachment.attachment import ReferenceType


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@then(parsers.cfparse("the review has {count:d} attachments linked to it"))
def review_has_attachments(manager, review, count):
    attachments = manager.get_review(review.id).attachments
    assert len(attachments) == count
    for attachment in attachments:
        assert attachment.reference_type == ReferenceType.REVIEW.value
        assert attachment.reference_id == str(review.id)
