"""Reviews bounded context: product reviews and their file attachments.

Handles the review lifecycle (write, revise, delete) and keeps attachment
metadata in sync with the reviews that own them. File bytes live in an
external object store reached through the storage port.
"""

import structlog
from protean.domain import Domain

reviews = Domain(name="reviews")

logger = structlog.get_logger(__name__)
