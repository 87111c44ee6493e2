"""ReviewLifecycleManager: create, read, update and delete reviews together
with the files attached to them.

Reviews and attachments are separate aggregates linked by a
``(reference_type, reference_id)`` pair. The manager keeps the two in step:
attachments are written in the same unit of work as the review they belong
to, looked up per review on reads, and removed when their review is deleted.

The object store is not transactional. When a create fails after some files
were already uploaded, the unit of work is rolled back and the uploaded
objects are deleted again before the error is re-raised.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ObjectNotFoundError, TransactionError, ValidationError
from protean.utils.globals import current_domain
from sqlalchemy.exc import IntegrityError

from reviews.attachment.attachment import Attachment, ReferenceType
from reviews.config import StorageSettings
from reviews.review.errors import InvalidReviewWriteRequest, ReviewNotFound, ensure_valid_star_rating
from reviews.review.repository import Page, PageRequest, ReviewSort
from reviews.review.review import Review
from reviews.storage import ContentUploader, FileUpload, StorageError, build_uploader, get_uploader
from reviews.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReviewInput:
    """Review payload for writes. ``review_id`` is required only for updates."""

    product_id: str
    customer_id: str
    content: str
    star_rating: Decimal | float | str
    title: str | None = None
    review_id: str | None = None


@dataclass(frozen=True)
class ReviewDetail:
    review: Review
    attachments: list[Attachment] = field(default_factory=list)


class ReviewLifecycleManager:
    def __init__(self, uploader: ContentUploader, bucket_url: str):
        self.uploader = uploader
        self.bucket_url = bucket_url.rstrip("/")

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def list_by_product(self, product_id, sort_by=None, page_request: PageRequest | None = None) -> Page:
        """One page of a product's reviews, each with its attachments."""
        sort = ReviewSort.parse(sort_by)
        page_request = page_request or PageRequest()

        logger.debug("Listing product reviews", product_id=str(product_id), sort=sort.value, page=page_request.page)

        page = current_domain.repository_for(Review).find_by_product(product_id, sort, page_request)
        return page.map(self._with_attachments)

    def get_review(self, review_id) -> ReviewDetail:
        review = self._load(review_id)

        logger.debug("Fetched review", review_id=str(review_id))
        return self._with_attachments(review)

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def create_review(self, review_input: ReviewInput, files: list[FileUpload] | None = None) -> Review:
        """Write a review and store its files.

        Either the review and all of its attachments are recorded, or none of
        them are and every object uploaded on the way has been deleted.
        """
        star_rating = ensure_valid_star_rating(review_input.star_rating)

        review = Review.write(
            product_id=str(review_input.product_id),
            customer_id=str(review_input.customer_id),
            title=review_input.title,
            content=review_input.content,
            star_rating=star_rating,
        )

        stored_keys: list[str] = []
        try:
            with UnitOfWork():
                self._persist(review)
                for position, upload in enumerate(files or []):
                    attachment = self._store_attachment(review, upload, position)
                    stored_keys.append(attachment.file_key)
        except TransactionError as exc:
            self._discard_objects(stored_keys)
            if _is_integrity_failure(exc):
                raise InvalidReviewWriteRequest(str(review.id)) from exc
            raise
        except IntegrityError as exc:
            self._discard_objects(stored_keys)
            raise InvalidReviewWriteRequest(str(review.id)) from exc
        except Exception:
            self._discard_objects(stored_keys)
            raise

        logger.info("Review written", review_id=str(review.id), attachment_count=len(stored_keys))
        return review

    def update_review(self, review_input: ReviewInput) -> Review:
        """Replace a review's content and rating. Attachments are left as they are."""
        star_rating = ensure_valid_star_rating(review_input.star_rating)
        if not review_input.review_id:
            raise ValidationError({"review_id": ["A review identifier is required to update a review"]})

        try:
            with UnitOfWork():
                review = self._load(review_input.review_id)
                review.revise(
                    product_id=str(review_input.product_id),
                    customer_id=str(review_input.customer_id),
                    title=review_input.title,
                    content=review_input.content,
                    star_rating=star_rating,
                )
                self._persist(review)
        except TransactionError as exc:
            if _is_integrity_failure(exc):
                raise InvalidReviewWriteRequest(str(review_input.review_id)) from exc
            raise
        except IntegrityError as exc:
            raise InvalidReviewWriteRequest(str(review_input.review_id)) from exc

        logger.info("Review revised", review_id=str(review.id))
        return review

    def delete_review(self, review_id) -> None:
        """Delete a review and its attachments.

        A missing review surfaces as the repository's ObjectNotFoundError.
        Stored objects are removed only after the records are gone.
        """
        with UnitOfWork():
            review = current_domain.repository_for(Review).get(review_id)
            attachments = current_domain.repository_for(Attachment).delete_by_reference(
                ReferenceType.REVIEW, review.id
            )
            current_domain.repository_for(Review).discard(review)

        self._discard_objects([attachment.file_key for attachment in attachments])
        logger.info("Review deleted", review_id=str(review_id), attachment_count=len(attachments))

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _load(self, review_id) -> Review:
        try:
            return current_domain.repository_for(Review).get(review_id)
        except ObjectNotFoundError:
            raise ReviewNotFound(review_id) from None

    def _with_attachments(self, review: Review) -> ReviewDetail:
        attachments = current_domain.repository_for(Attachment).find_by_reference(ReferenceType.REVIEW, review.id)
        return ReviewDetail(review=review, attachments=attachments)

    def _persist(self, review: Review) -> None:
        repo = current_domain.repository_for(Review)
        try:
            repo.add(review)
            # Emit the row now so constraint breaches surface before any upload
            repo._dao._flush()
        except (ValidationError, IntegrityError) as exc:
            raise InvalidReviewWriteRequest(str(review.id)) from exc

    def _store_attachment(self, review: Review, upload: FileUpload, position: int) -> Attachment:
        path = "/".join([ReferenceType.REVIEW.domain, str(review.product_id)])
        key = self.uploader.upload(path, upload)

        attachment = Attachment.link(
            reference_type=ReferenceType.REVIEW,
            reference_id=review.id,
            file_name=upload.filename,
            file_key=key,
            file_url="/".join([self.bucket_url, key]),
            display_order=position,
        )
        try:
            current_domain.repository_for(Attachment).add(attachment)
        except Exception:
            self._discard_objects([key])
            raise
        return attachment

    def _discard_objects(self, keys: list[str]) -> None:
        for key in keys:
            try:
                self.uploader.delete(key)
            except StorageError as exc:
                logger.warning("Failed to delete stored object", key=key, error=str(exc))


def _is_integrity_failure(exc: TransactionError) -> bool:
    return (exc.extra_info or {}).get("original_exception") == "IntegrityError"


def build_review_manager(settings: StorageSettings | None = None) -> ReviewLifecycleManager:
    """Wire a manager to the uploader and base URL from ``settings``.

    Without settings, the environment supplies the base URL and the shared
    uploader from the registry is used.
    """
    if settings is None:
        return ReviewLifecycleManager(uploader=get_uploader(), bucket_url=StorageSettings.from_env().bucket_url)
    return ReviewLifecycleManager(uploader=build_uploader(settings), bucket_url=settings.bucket_url)
