import pytest
from reviews.review.lifecycle import ReviewLifecycleManager
from reviews.storage.fake_adapter import InMemoryUploader

BUCKET_URL = "https://reviews-bucket.example.com"


@pytest.fixture()
def uploader():
    return InMemoryUploader()


@pytest.fixture()
def manager(uploader):
    return ReviewLifecycleManager(uploader=uploader, bucket_url=BUCKET_URL)
