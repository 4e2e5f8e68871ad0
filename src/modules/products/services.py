"""Product service layer (Use Cases).

Orchestrates the Product lifecycle, delegating persistence to the
injected ``IProductRepository`` and image hosting to the injected
``IMediaStore``.

Rules enforced here:
- A product cannot be created without an image.
- Replacing a product's image decommissions the previous remote asset.
- Deleting a product deletes its remote asset.

The media store call and the database write are sequential side effects
with no surrounding transaction.  A failed insert after a successful
upload leaves an orphaned asset; a failed record write after an old
image was deleted leaves a record pointing at a removed asset.  Both are
logged, neither corrupts the catalog.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog

from modules.products.exceptions import (
    ProductNotFound,
    ProductValidationError,
    StoreUnavailable,
)
from modules.products.models import Product
from shared.domain.media import MediaStoreError

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, ImageUploadDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository
    from shared.domain.media import IMediaStore, RemoteAsset

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives its collaborators via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository, media_store: IMediaStore) -> None:
        self._repo = repository
        self._media = media_store

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(
        self, dto: CreateProductDTO, image: Optional[ImageUploadDTO]
    ) -> Product:
        """Upload the image, then insert the product pointing at it.

        Raises:
            ProductValidationError: if no image (or an empty one) is supplied.
            MediaStoreError: if the upload fails; nothing is persisted.
            StoreUnavailable: if the insert fails; the uploaded asset is orphaned.
        """
        if image is None or image.is_empty:
            raise ProductValidationError("image", "Image is required.")

        log = logger.bind(name=dto.name)
        asset = self._upload(image)

        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            image_url=asset.url,
        )
        try:
            product = self._repo.save(product)
        except StoreUnavailable:
            log.error("product.create_orphaned_image", identifier=asset.identifier)
            raise
        log.info("product.created", product_id=str(product.id))
        return product

    def update_product(
        self,
        id: str,
        dto: UpdateProductDTO,
        image: Optional[ImageUploadDTO] = None,
    ) -> Product:
        """Apply the supplied fields and, optionally, swap the image.

        With a new image the order is: upload the new asset, delete the
        old one (failure only logged), persist.  Without one, the stored
        ``image_url`` is left untouched.

        Raises:
            ProductNotFound: if the product does not exist.
            MediaStoreError: if the new image cannot be uploaded.
        """
        product = self.get_product(id)
        log = logger.bind(product_id=str(id))

        for field in ("name", "description", "price"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        if image is not None and not image.is_empty:
            previous_url = product.image_url
            asset = self._upload(image)
            self._discard_image(previous_url, product_id=str(id))
            product.image_url = asset.url
            log.info("product.image_replaced", identifier=asset.identifier)

        product = self._repo.save(product)
        log.info("product.updated")
        return product

    def delete_product(self, id: str) -> Product:
        """Delete the product's remote image, then its record.

        Returns the removed product as it was before deletion.

        Raises:
            ProductNotFound: if the product does not exist; no media call is made.
        """
        product = self.get_product(id)
        self._discard_image(product.image_url, product_id=str(id))
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=str(id))
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product in store order."""
        return self._repo.list()

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    # ------------------------------------------------------------------
    # Media helpers
    # ------------------------------------------------------------------

    def _upload(self, image: ImageUploadDTO) -> RemoteAsset:
        return self._media.upload(image.content, image.filename, image.content_type)

    def _discard_image(self, url: str, product_id: str) -> None:
        """Best-effort removal of a remote asset; failures are only logged."""
        log = logger.bind(product_id=product_id, image_url=url)
        try:
            identifier = self._media.derive_identifier(url)
            if not self._media.delete(identifier):
                log.warning("product.image_already_gone", identifier=identifier)
        except MediaStoreError as exc:
            log.warning("product.image_delete_failed", error=str(exc))
