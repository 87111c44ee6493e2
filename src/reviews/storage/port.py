"""Content uploader port (abstract interface).

Defines the contract every object-store adapter implements, so the review
lifecycle can run against InMemoryUploader in dev/test and S3Uploader in
production without any change to domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath
from uuid import uuid4


class StorageError(Exception):
    """The object store could not store or delete an object."""


@dataclass(frozen=True)
class FileUpload:
    """A file received from a client, not yet stored."""

    filename: str
    content: bytes
    content_type: str | None = None


def object_key(path: str, filename: str) -> str:
    """A unique key under ``path`` that keeps the file's extension."""
    suffix = PurePosixPath(filename).suffix.lower()
    return f"{path.strip('/')}/{uuid4().hex}{suffix}"


class ContentUploader(ABC):
    @abstractmethod
    def upload(self, path: str, upload: FileUpload) -> str:
        """Store the file under ``path`` and return its storage key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a stored object. Deleting a missing key is not an error."""
        ...
