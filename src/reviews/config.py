"""Storage settings for review attachments, read from the environment."""

import os

from pydantic import BaseModel, Field, model_validator


class StorageSettings(BaseModel):
    backend: str = Field("memory", pattern="^(memory|s3)$")
    bucket_url: str = Field("http://localhost:9000/reviews", min_length=1)
    bucket_name: str | None = None
    region_name: str | None = None
    endpoint_url: str | None = None

    @model_validator(mode="after")
    def _s3_needs_bucket(self) -> "StorageSettings":
        if self.backend == "s3" and not self.bucket_name:
            raise ValueError("REVIEWS_BUCKET_NAME is required when the storage backend is s3")
        return self

    @classmethod
    def from_env(cls) -> "StorageSettings":
        values = {
            "backend": os.getenv("REVIEWS_STORAGE_BACKEND"),
            "bucket_url": os.getenv("REVIEWS_BUCKET_URL"),
            "bucket_name": os.getenv("REVIEWS_BUCKET_NAME"),
            "region_name": os.getenv("REVIEWS_S3_REGION"),
            "endpoint_url": os.getenv("REVIEWS_S3_ENDPOINT_URL"),
        }
        return cls(**{key: value for key, value in values.items() if value})
