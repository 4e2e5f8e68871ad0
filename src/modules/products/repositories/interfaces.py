"""Product repository interface.

The generic ``IRepository[Product]`` contract is all the catalog needs:
``get_by_id`` is the point lookup used by update and delete, so neither
has to scan the full list to find the existing record.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    Implementations raise ``StoreUnavailable`` when the underlying store
    cannot be reached; a missing record is ``None`` / ``False``, never an
    exception.
    """
