import pytest

from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from modules.products import providers
from tests.fakes import JPEG_BYTES, PNG_BYTES, InMemoryMediaStore


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def media_store(monkeypatch):
    """In-memory media store wired into every service the app builds."""
    store = InMemoryMediaStore()
    monkeypatch.setattr(providers, "get_media_store", lambda: store)
    return store


@pytest.fixture()
def jpeg_file():
    return SimpleUploadedFile("mug.jpg", JPEG_BYTES, content_type="image/jpeg")


@pytest.fixture()
def png_file():
    return SimpleUploadedFile("mug-v2.png", PNG_BYTES, content_type="image/png")
