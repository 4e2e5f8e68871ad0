"""Cloudinary implementation of the media store.

Uploaded images land in the ``store-products`` folder, so Cloudinary
issues identifiers of the form ``store-products/<name>`` and delivery
URLs ending in ``.../store-products/<name>.<ext>``.
``derive_public_id`` reverses that naming; it is the only place that
knows how a URL maps back to an identifier.
"""

from __future__ import annotations

import io
from typing import Any, Dict, List, Mapping
from urllib.parse import unquote, urlparse

import cloudinary.uploader
import structlog
from cloudinary.exceptions import Error as CloudinaryError
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from shared.domain.media import IMediaStore, InvalidAssetUrl, MediaStoreError, RemoteAsset

logger = structlog.get_logger(__name__)

MEDIA_FOLDER = "store-products"
ALLOWED_FORMATS: List[str] = ["jpg", "png"]
UPLOAD_TRANSFORMATION: List[Dict[str, Any]] = [
    {"width": 500, "height": 500, "crop": "limit"},
]


def derive_public_id(url: str) -> str:
    """Rebuild the Cloudinary ``public_id`` of an asset from its delivery URL.

    ``https://res.cloudinary.com/demo/image/upload/v17/store-products/abc.jpg``
    maps to ``store-products/abc``.

    Raises:
        InvalidAssetUrl: if the URL has no file name to derive from.
    """
    path = urlparse(url).path
    filename = unquote(path.rstrip("/").rsplit("/", 1)[-1]) if path else ""
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    if not stem:
        raise InvalidAssetUrl(f"Cannot derive a media identifier from '{url}'.")
    return f"{MEDIA_FOLDER}/{stem}"


class MediaStoreConfig(BaseModel):
    """Cloudinary account credentials."""

    model_config = ConfigDict(frozen=True)

    cloud_name: str
    api_key: str
    api_secret: SecretStr

    @field_validator("cloud_name", "api_key")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Media store credentials must not be blank.")
        return v.strip()

    @classmethod
    def from_settings(cls, media_settings: Mapping[str, str]) -> MediaStoreConfig:
        """Build the config from the ``MEDIA_STORE`` settings dict."""
        return cls(
            cloud_name=media_settings["CLOUD_NAME"],
            api_key=media_settings["API_KEY"],
            api_secret=media_settings["API_SECRET"],
        )

    def credentials(self) -> Dict[str, str]:
        """Per-call credential options understood by the Cloudinary SDK."""
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret.get_secret_value(),
        }


class CloudinaryMediaStore(IMediaStore):
    """Media store backed by the Cloudinary upload API.

    Credentials are passed on every call instead of through
    ``cloudinary.config()``, so several stores can coexist in one process.
    """

    def __init__(self, config: MediaStoreConfig) -> None:
        self._config = config

    def upload(self, content: bytes, filename: str, content_type: str) -> RemoteAsset:
        log = logger.bind(filename=filename, content_type=content_type, size=len(content))
        stream = io.BytesIO(content)
        stream.name = filename
        try:
            response = cloudinary.uploader.upload(
                stream,
                folder=MEDIA_FOLDER,
                resource_type="image",
                allowed_formats=ALLOWED_FORMATS,
                transformation=UPLOAD_TRANSFORMATION,
                **self._config.credentials(),
            )
        except CloudinaryError as exc:
            log.error("media.upload_failed", error=str(exc))
            raise MediaStoreError("Image upload failed.") from exc

        asset = RemoteAsset(url=response["secure_url"], identifier=response["public_id"])
        log.info("media.uploaded", identifier=asset.identifier)
        return asset

    def derive_identifier(self, url: str) -> str:
        return derive_public_id(url)

    def delete(self, identifier: str) -> bool:
        """Destroy an asset; ``False`` means Cloudinary did not know it."""
        log = logger.bind(identifier=identifier)
        try:
            response = cloudinary.uploader.destroy(
                identifier,
                resource_type="image",
                invalidate=True,
                **self._config.credentials(),
            )
        except CloudinaryError as exc:
            log.error("media.delete_failed", error=str(exc))
            raise MediaStoreError("Image deletion failed.") from exc

        result = response.get("result")
        if result == "ok":
            log.info("media.deleted")
            return True
        if result == "not found":
            log.warning("media.delete_not_found")
            return False
        log.error("media.delete_unexpected_result", result=result)
        raise MediaStoreError(f"Unexpected media store response: {result!r}.")
