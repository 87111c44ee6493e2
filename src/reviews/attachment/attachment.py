"""Attachment aggregate: metadata for a file stored in the object store.

The attachment store is shared by several owner kinds. An attachment names
its owner through ``reference_type`` and ``reference_id`` instead of being
held by the owner, so owners query for their attachments when they need them.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, Integer, String

from reviews.domain import reviews


class ReferenceType(Enum):
    REVIEW = "Review"
    PRODUCT = "Product"

    @property
    def domain(self) -> str:
        """Path segment under which this owner kind's files are stored."""
        return self.name.lower()


@reviews.aggregate
class Attachment:
    file_name = String(required=True, max_length=255)
    file_key = String(required=True, max_length=500)
    file_url = String(required=True, max_length=1000)

    reference_type = String(choices=ReferenceType, required=True)
    reference_id = Identifier(required=True)
    display_order = Integer(default=0)

    created_at = DateTime()

    @classmethod
    def link(cls, reference_type, reference_id, file_name, file_key, file_url, display_order=0):
        """Record an uploaded file against its owner."""
        return cls(
            file_name=file_name,
            file_key=file_key,
            file_url=file_url,
            reference_type=ReferenceType(reference_type).value,
            reference_id=str(reference_id),
            display_order=display_order,
            created_at=datetime.now(UTC),
        )
