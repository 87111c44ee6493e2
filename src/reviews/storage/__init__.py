"""Content uploader registry.

Provides get_uploader() / set_uploader() to swap implementations:
- InMemoryUploader for development and testing (default)
- S3Uploader when ``REVIEWS_STORAGE_BACKEND=s3``
"""

from reviews.config import StorageSettings
from reviews.storage.port import ContentUploader, FileUpload, StorageError

_current_uploader: ContentUploader | None = None


def build_uploader(settings: StorageSettings) -> ContentUploader:
    if settings.backend == "s3":
        from reviews.storage.s3_adapter import S3Uploader

        return S3Uploader(
            bucket_name=settings.bucket_name,
            region_name=settings.region_name,
            endpoint_url=settings.endpoint_url,
        )

    from reviews.storage.fake_adapter import InMemoryUploader

    return InMemoryUploader()


def get_uploader() -> ContentUploader:
    """Return the current uploader, building it from the environment on first use."""
    global _current_uploader
    if _current_uploader is None:
        _current_uploader = build_uploader(StorageSettings.from_env())
    return _current_uploader


def set_uploader(uploader: ContentUploader) -> None:
    """Override the active uploader (useful for tests)."""
    global _current_uploader
    _current_uploader = uploader


def reset_uploader() -> None:
    global _current_uploader
    _current_uploader = None


__all__ = [
    "ContentUploader",
    "FileUpload",
    "StorageError",
    "build_uploader",
    "get_uploader",
    "reset_uploader",
    "set_uploader",
]
