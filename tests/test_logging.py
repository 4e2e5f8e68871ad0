"""Structured logging as emitted by the catalog.

Log records reach stdlib logging with the processed structlog event dict
as ``record.msg``, so tests inspect the dict the JSON renderer would print.
"""

import logging
import uuid
from unittest.mock import patch

import pytest
from cloudinary.exceptions import Error as CloudinaryError

from shared.domain.media import MediaStoreError
from shared.infrastructure.media import CloudinaryMediaStore, MediaStoreConfig

UPLOAD_PATH = "shared.infrastructure.media.cloudinary.uploader.upload"


def _events(caplog, name):
    return [
        record.msg
        for record in caplog.records
        if isinstance(record.msg, dict) and record.msg.get("event") == name
    ]


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="catalog-req-1")
        assert response["X-Request-ID"] == "catalog-req-1"

    def test_generates_uuid_when_no_request_id(self, client):
        request_id = client.get("/health")["X-Request-ID"]
        assert str(uuid.UUID(request_id, version=4)) == request_id

    def test_request_finished_carries_status_and_duration(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID="catalog-req-2")

        (finished,) = _events(caplog, "request_finished")
        assert finished["correlation_id"] == "catalog-req-2"
        assert finished["path"] == "/health"
        assert finished["status_code"] == 200
        assert finished["duration_ms"] >= 0

    def test_catalog_events_carry_correlation_id(
        self, api_client, media_store, jpeg_file, caplog
    ):
        with caplog.at_level(logging.INFO):
            response = api_client.post(
                "/products",
                {"name": "Mug", "description": "Ceramic mug", "price": "9.99", "image": jpeg_file},
                format="multipart",
                HTTP_X_REQUEST_ID="catalog-req-3",
            )

        assert response.status_code == 201
        (created,) = _events(caplog, "product.created")
        assert created["correlation_id"] == "catalog-req-3"
        assert created["product_id"] == response.json()["product"]["id"]


class TestCredentialMasking:
    @pytest.fixture()
    def store(self):
        return CloudinaryMediaStore(
            MediaStoreConfig(cloud_name="demo", api_key="key-123", api_secret="topsecret")
        )

    def test_upload_failure_masks_credentials_in_error(self, store, caplog):
        sdk_error = CloudinaryError(
            "Invalid Signature. String to sign - 'api_key=key-123&api_secret=topsecret'"
        )
        with caplog.at_level(logging.INFO), patch(UPLOAD_PATH, side_effect=sdk_error):
            with pytest.raises(MediaStoreError):
                store.upload(b"jpeg", "mug.jpg", "image/jpeg")

        (failed,) = _events(caplog, "media.upload_failed")
        assert "topsecret" not in failed["error"]
        assert "key-123" not in failed["error"]
        assert "***MASKED***" in failed["error"]
        assert failed["filename"] == "mug.jpg"

    def test_uploaded_event_keeps_identifier(self, store, caplog):
        response = {
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/store-products/abc.jpg",
            "public_id": "store-products/abc",
        }
        with caplog.at_level(logging.INFO), patch(UPLOAD_PATH, return_value=response):
            store.upload(b"jpeg", "mug.jpg", "image/jpeg")

        (uploaded,) = _events(caplog, "media.uploaded")
        assert uploaded["identifier"] == "store-products/abc"
        assert "api_secret" not in uploaded
