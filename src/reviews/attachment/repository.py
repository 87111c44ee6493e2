from reviews.attachment.attachment import Attachment, ReferenceType
from reviews.domain import reviews


@reviews.repository(part_of=Attachment)
class AttachmentRepository:
    def find_by_reference(self, reference_type: ReferenceType, reference_id) -> list[Attachment]:
        """Attachments owned by ``(reference_type, reference_id)``, in upload order."""
        results = (
            self._dao.query.filter(
                reference_type=ReferenceType(reference_type).value,
                reference_id=str(reference_id),
            )
            .order_by("display_order")
            .limit(None)
            .all()
        )
        return list(results.items)

    def delete_by_reference(self, reference_type: ReferenceType, reference_id) -> list[Attachment]:
        """Delete every attachment of an owner and return what was deleted."""
        attachments = self.find_by_reference(reference_type, reference_id)
        for attachment in attachments:
            self._dao.delete(attachment)
        return attachments
