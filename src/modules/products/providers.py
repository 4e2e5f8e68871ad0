"""Wiring for the catalog's collaborators.

Views and management commands obtain their ``ProductService`` here, so
the Cloudinary adapter is built from settings in exactly one place.
"""

from __future__ import annotations

from django.conf import settings

from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from shared.domain.media import IMediaStore
from shared.infrastructure.media import CloudinaryMediaStore, MediaStoreConfig


def get_media_store() -> IMediaStore:
    return CloudinaryMediaStore(MediaStoreConfig.from_settings(settings.MEDIA_STORE))


def build_product_service() -> ProductService:
    return ProductService(
        repository=ProductDjangoRepository(),
        media_store=get_media_store(),
    )
