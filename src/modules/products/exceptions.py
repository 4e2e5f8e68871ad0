"""Product domain exceptions.

Raised by the Service Layer (and its repository) when business rules
are violated or the store cannot be reached.  The API layer (Views)
and the catalog pages catch these and translate them into appropriate
responses.
"""

from __future__ import annotations


class ProductValidationError(Exception):
    """Input for a product is missing or invalid.

    ``field`` names the offending input (``"image"``, ``"price"`` ...).
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class ProductNotFound(Exception):
    """The requested product does not exist."""


class StoreUnavailable(Exception):
    """The product store could not be read or written."""
