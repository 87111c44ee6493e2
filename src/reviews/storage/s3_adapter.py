"""S3 content uploader (production).

Stores review files with ``put_object`` and removes them with
``delete_object``. Works against AWS S3 or any S3-compatible endpoint
(MinIO, LocalStack) through ``endpoint_url``.
"""

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from reviews.storage.port import ContentUploader, FileUpload, StorageError, object_key


class S3Uploader(ContentUploader):
    def __init__(self, bucket_name: str, client=None, region_name: str | None = None, endpoint_url: str | None = None):
        self.bucket_name = bucket_name
        self._client = client or boto3.client("s3", region_name=region_name, endpoint_url=endpoint_url)

    def upload(self, path: str, upload: FileUpload) -> str:
        key = object_key(path, upload.filename)
        kw = dict(Bucket=self.bucket_name, Key=key, Body=upload.content)
        if upload.content_type:
            kw["ContentType"] = upload.content_type

        try:
            self._client.put_object(**kw)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Failed to upload {upload.filename} to s3://{self.bucket_name}/{key}: {exc}") from exc
        return key

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket_name, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Failed to delete s3://{self.bucket_name}/{key}: {exc}") from exc
