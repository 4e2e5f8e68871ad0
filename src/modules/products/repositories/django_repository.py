"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern for missing records
(``None`` / ``False``); driver failures are translated into
``StoreUnavailable`` so the layers above never see database exceptions.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from modules.products.exceptions import StoreUnavailable
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except DatabaseError as exc:
        logger.error("product.store_unavailable", operation=operation, error=str(exc))
        raise StoreUnavailable(f"Product store unavailable during {operation}.") from exc


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        with _store_errors("get_by_id"):
            try:
                return Product.objects.filter(id=id).first()
            except (ValueError, ValidationError):
                return None

    def list(self) -> List[Product]:
        """Return every product in store order."""
        with _store_errors("list"):
            return list(Product.objects.all())

    def save(self, entity: Product) -> Product:
        """Persist (insert or update) a product."""
        with _store_errors("save"), transaction.atomic():
            entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    def delete(self, id: str) -> bool:
        """Hard-delete a product by ID.

        Returns ``True`` if a row was removed, ``False`` if no product
        exists with the given ID.
        """
        with _store_errors("delete"):
            try:
                deleted, _ = Product.objects.filter(id=id).delete()
            except (ValueError, ValidationError):
                return False
        if deleted:
            logger.info("product.deleted_from_store", product_id=str(id))
        return bool(deleted)
