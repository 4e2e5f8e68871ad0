"""Test doubles for external collaborators."""

from __future__ import annotations

from typing import Dict, List
from uuid import uuid4

from shared.domain.media import IMediaStore, MediaStoreError, RemoteAsset
from shared.infrastructure.media import MEDIA_FOLDER, derive_public_id

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-jpeg-body"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-body"


class InMemoryMediaStore(IMediaStore):
    """Media store that names assets the way Cloudinary does.

    Records every upload and every delete call so tests can assert on
    exactly which remote assets were touched.
    """

    def __init__(self, cloud_name: str = "test-cloud") -> None:
        self.cloud_name = cloud_name
        self.assets: Dict[str, bytes] = {}
        self.uploads: List[RemoteAsset] = []
        self.delete_calls: List[str] = []
        self.fail_uploads = False
        self.fail_deletes = False

    def upload(self, content: bytes, filename: str, content_type: str) -> RemoteAsset:
        if self.fail_uploads:
            raise MediaStoreError("Image upload failed.")
        extension = "png" if content_type == "image/png" else "jpg"
        identifier = f"{MEDIA_FOLDER}/{uuid4().hex[:20]}"
        url = (
            f"https://res.cloudinary.com/{self.cloud_name}/image/upload/"
            f"v1700000000/{identifier}.{extension}"
        )
        asset = RemoteAsset(url=url, identifier=identifier)
        self.assets[identifier] = content
        self.uploads.append(asset)
        return asset

    def derive_identifier(self, url: str) -> str:
        return derive_public_id(url)

    def delete(self, identifier: str) -> bool:
        self.delete_calls.append(identifier)
        if self.fail_deletes:
            raise MediaStoreError("Image deletion failed.")
        return self.assets.pop(identifier, None) is not None
