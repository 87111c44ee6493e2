"""Integration tests for storage settings and the uploader registry."""

import pytest
from pydantic import ValidationError as SettingsError
from reviews.config import StorageSettings
from reviews.review.lifecycle import ReviewLifecycleManager, build_review_manager
from reviews.storage import build_uploader, get_uploader, reset_uploader, set_uploader
from reviews.storage.fake_adapter import InMemoryUploader
from reviews.storage.s3_adapter import S3Uploader


@pytest.fixture()
def clean_env(monkeypatch):
    for name in (
        "REVIEWS_STORAGE_BACKEND",
        "REVIEWS_BUCKET_URL",
        "REVIEWS_BUCKET_NAME",
        "REVIEWS_S3_REGION",
        "REVIEWS_S3_ENDPOINT_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestStorageSettings:
    def test_defaults(self, clean_env):
        settings = StorageSettings.from_env()
        assert settings.backend == "memory"
        assert settings.bucket_url == "http://localhost:9000/reviews"

    def test_from_env(self, clean_env):
        clean_env.setenv("REVIEWS_STORAGE_BACKEND", "s3")
        clean_env.setenv("REVIEWS_BUCKET_NAME", "reviews-prod")
        clean_env.setenv("REVIEWS_BUCKET_URL", "https://reviews-prod.s3.amazonaws.com")
        clean_env.setenv("REVIEWS_S3_REGION", "eu-west-1")

        settings = StorageSettings.from_env()
        assert settings.backend == "s3"
        assert settings.bucket_name == "reviews-prod"
        assert settings.region_name == "eu-west-1"

    def test_unknown_backend_rejected(self):
        with pytest.raises(SettingsError):
            StorageSettings(backend="ftp")

    def test_s3_requires_bucket_name(self):
        with pytest.raises(SettingsError):
            StorageSettings(backend="s3")


class TestUploaderRegistry:
    def test_memory_backend(self):
        assert isinstance(build_uploader(StorageSettings()), InMemoryUploader)

    def test_s3_backend(self):
        uploader = build_uploader(StorageSettings(backend="s3", bucket_name="reviews-prod", region_name="us-east-1"))
        assert isinstance(uploader, S3Uploader)
        assert uploader.bucket_name == "reviews-prod"

    def test_get_uploader_defaults_to_memory(self, clean_env):
        reset_uploader()
        assert isinstance(get_uploader(), InMemoryUploader)

    def test_get_uploader_is_a_singleton(self, clean_env):
        reset_uploader()
        assert get_uploader() is get_uploader()

    def test_set_uploader_overrides(self):
        uploader = InMemoryUploader()
        set_uploader(uploader)
        assert get_uploader() is uploader


class TestBuildReviewManager:
    def test_wires_bucket_url_and_uploader(self):
        manager = build_review_manager(StorageSettings(bucket_url="https://cdn.example.com/"))
        assert isinstance(manager, ReviewLifecycleManager)
        assert isinstance(manager.uploader, InMemoryUploader)
        assert manager.bucket_url == "https://cdn.example.com"

    def test_reads_environment_by_default(self, clean_env):
        clean_env.setenv("REVIEWS_BUCKET_URL", "https://env.example.com")
        assert build_review_manager().bucket_url == "https://env.example.com"

    def test_default_manager_shares_registered_uploader(self, clean_env):
        uploader = InMemoryUploader()
        set_uploader(uploader)
        assert build_review_manager().uploader is uploader
