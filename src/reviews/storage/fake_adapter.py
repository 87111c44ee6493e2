"""In-memory content uploader for development and testing.

Keeps uploaded objects in a dict and can be configured at runtime to fail,
optionally only after a number of successful uploads, which is how tests
exercise a failure in the middle of a multi-file review.
"""

from reviews.storage.port import ContentUploader, FileUpload, StorageError, object_key


class InMemoryUploader(ContentUploader):
    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.calls: list[dict] = []
        self.should_succeed: bool = True
        self.fail_after: int | None = None
        self.failure_reason: str = "Object store unavailable"

    def configure(self, should_succeed: bool, fail_after: int | None = None, failure_reason: str | None = None) -> None:
        """Configure upload behavior. ``fail_after`` uploads succeed before failing."""
        self.should_succeed = should_succeed
        self.fail_after = fail_after
        if failure_reason:
            self.failure_reason = failure_reason

    def upload(self, path: str, upload: FileUpload) -> str:
        self.calls.append({"method": "upload", "path": path, "filename": upload.filename})

        uploads_done = sum(1 for call in self.calls if call["method"] == "upload") - 1
        if not self.should_succeed and (self.fail_after is None or uploads_done >= self.fail_after):
            raise StorageError(self.failure_reason)

        key = object_key(path, upload.filename)
        self.objects[key] = upload.content
        return key

    def delete(self, key: str) -> None:
        self.calls.append({"method": "delete", "key": key})
        self.objects.pop(key, None)
