"""Media store interfaces.

The catalog never talks to an image host directly: it depends on
``IMediaStore`` and receives a concrete adapter via constructor
injection.  Adapter failures surface as ``MediaStoreError`` so callers
can decide whether a failed call is fatal to the enclosing operation.
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict


class MediaStoreError(Exception):
    """The remote media store rejected a request or could not be reached."""


class InvalidAssetUrl(MediaStoreError):
    """A stored URL does not point at an asset issued by the media store."""


class RemoteAsset(BaseModel):
    """A single uploaded file, addressable by URL and by store identifier."""

    model_config = ConfigDict(frozen=True)

    url: str
    identifier: str


class IMediaStore(Protocol):
    """Contract for the image hosting adapter."""

    def upload(self, content: bytes, filename: str, content_type: str) -> RemoteAsset: ...

    def derive_identifier(self, url: str) -> str: ...

    def delete(self, identifier: str) -> bool: ...
