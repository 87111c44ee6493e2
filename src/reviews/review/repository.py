"""Review repository and the paging/sorting types used to query it."""

import math
from dataclasses import dataclass, field
from enum import Enum

from protean.exceptions import ValidationError

from reviews.domain import reviews
from reviews.review.review import Review

MAX_PAGE_SIZE = 100


class ReviewSort(Enum):
    LATEST = "latest"
    OLDEST = "oldest"
    RATING_DESC = "rating_desc"
    RATING_ASC = "rating_asc"

    @property
    def order_by(self) -> list[str]:
        return _ORDERING[self]

    @classmethod
    def parse(cls, value) -> "ReviewSort":
        """Accept a ReviewSort, its value, or None (latest first)."""
        if value is None:
            return cls.LATEST
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError({"sort_by": [f"Unknown sort key '{value}', expected one of: {allowed}"]}) from None


_ORDERING = {
    ReviewSort.LATEST: ["-created_at", "id"],
    ReviewSort.OLDEST: ["created_at", "id"],
    ReviewSort.RATING_DESC: ["-star_rating", "-created_at", "id"],
    ReviewSort.RATING_ASC: ["star_rating", "-created_at", "id"],
}


@dataclass(frozen=True)
class PageRequest:
    """A zero-based page window."""

    page: int = 0
    size: int = 10

    def __post_init__(self):
        if self.page < 0:
            raise ValidationError({"page": ["Page number cannot be negative"]})
        if self.size < 1 or self.size > MAX_PAGE_SIZE:
            raise ValidationError({"size": [f"Page size must be between 1 and {MAX_PAGE_SIZE}"]})

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page:
    items: list = field(default_factory=list)
    page: int = 0
    size: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return (self.page + 1) * self.size < self.total

    def map(self, fn) -> "Page":
        return Page(items=[fn(item) for item in self.items], page=self.page, size=self.size, total=self.total)


@reviews.repository(part_of=Review)
class ReviewRepository:
    def find_by_product(self, product_id, sort: ReviewSort, page_request: PageRequest) -> Page:
        """One page of a product's reviews, ordered by ``sort``."""
        results = (
            self._dao.query.filter(product_id=str(product_id))
            .order_by(sort.order_by)
            .offset(page_request.offset)
            .limit(page_request.size)
            .all()
        )
        return Page(
            items=list(results.items),
            page=page_request.page,
            size=page_request.size,
            total=results.total,
        )

    def discard(self, review: Review) -> None:
        self._dao.delete(review)
