"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; downstream failures become a generic message so no
internal detail leaks to the client.  Anything else propagates.
"""

from __future__ import annotations

from typing import Optional

import structlog
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products import providers
from modules.products.dtos import (
    CreateProductDTO,
    ImageUploadDTO,
    UpdateProductDTO,
    build_product_dto,
)
from modules.products.exceptions import (
    ProductNotFound,
    ProductValidationError,
    StoreUnavailable,
)
from modules.products.serializers import ProductSerializer
from shared.domain.media import MediaStoreError

logger = structlog.get_logger(__name__)

NOT_FOUND_MESSAGE = "Product not found"


def _message(text: str, code: int) -> Response:
    return Response({"message": text}, status=code)


def _image_from(request: Request) -> Optional[ImageUploadDTO]:
    upload = request.FILES.get("image")
    if upload is None:
        return None
    return ImageUploadDTO.from_uploaded_file(upload)


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` built by ``providers`` (repository + media
    store).  Does **not** extend ``ModelViewSet``: all ORM access goes
    through the service/repository layer.
    """

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = providers.build_product_service()

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /products"""
        try:
            products = self._service.list_products()
        except StoreUnavailable:
            return _message("Error fetching products", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"products": ProductSerializer(products, many=True).data})

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /products"""
        try:
            dto = build_product_dto(CreateProductDTO, request.data)
            product = self._service.create_product(dto, _image_from(request))
        except ProductValidationError as exc:
            return _message(exc.message, status.HTTP_400_BAD_REQUEST)
        except (MediaStoreError, StoreUnavailable) as exc:
            logger.error("product.create_failed", error=exc.__class__.__name__)
            return _message("Error creating product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"message": "Product created", "product": ProductSerializer(product).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /products/{pk}"""
        if pk is None:
            return _message(NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
        try:
            dto = build_product_dto(UpdateProductDTO, request.data)
            product = self._service.update_product(pk, dto, _image_from(request))
        except ProductValidationError as exc:
            return _message(exc.message, status.HTTP_400_BAD_REQUEST)
        except ProductNotFound:
            return _message(NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
        except (MediaStoreError, StoreUnavailable) as exc:
            logger.error("product.update_failed", product_id=pk, error=exc.__class__.__name__)
            return _message("Error updating product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"message": "Product updated", "result": ProductSerializer(product).data}
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /products/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /products/{pk}"""
        if pk is None:
            return _message(NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
        try:
            product = self._service.delete_product(pk)
        except ProductNotFound:
            return _message(NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
        except StoreUnavailable:
            logger.error("product.delete_failed", product_id=pk)
            return _message("Error deleting product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {
                "message": "Product deleted",
                "result": {"id": str(product.id), "deleted": True},
            }
        )
