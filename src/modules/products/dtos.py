"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the interface layers (DRF views and the
catalog pages) and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ImageUploadDTO``: an uploaded image file, read into memory.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from modules.products.exceptions import ProductValidationError

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile

ProductFields = TypeVar("ProductFields", bound=BaseModel)

PRODUCT_FIELDS = ("name", "description", "price")

# Column limits of ``Product``; the database would truncate or round
# anything wider after the image is already uploaded.
NAME_MAX_LENGTH = 255
PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2


def _strip_required(v: str, label: str) -> str:
    if not v or not v.strip():
        raise ValueError(f"{label} must not be empty.")
    return v.strip()


def _positive_price(v: Decimal) -> Decimal:
    if not v.is_finite() or v <= 0:
        raise ValueError("Price must be greater than zero.")
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` and ``description`` are non-empty strings.
    - ``name`` fits the 255 character column.
    - ``price`` is a Decimal greater than zero with at most 10 digits,
      2 of them decimal places.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str
    price: Decimal = Field(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return _strip_required(v, "Name")

    @field_validator("description")
    @classmethod
    def description_must_not_be_empty(cls, v: str) -> str:
        return _strip_required(v, "Description")

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        return _positive_price(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields will be updated.  Supplied
    values obey the same limits as ``CreateProductDTO``.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _strip_required(v, "Name")

    @field_validator("description")
    @classmethod
    def description_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _strip_required(v, "Description")

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return None if v is None else _positive_price(v)


class ImageUploadDTO(BaseModel):
    """An image file received from a client, held in memory."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content_type: str
    content: bytes

    @property
    def is_empty(self) -> bool:
        return not self.content

    @classmethod
    def from_uploaded_file(cls, upload: UploadedFile) -> ImageUploadDTO:
        """Read a Django ``UploadedFile`` into a DTO."""
        upload.seek(0)
        return cls(
            filename=upload.name or "upload",
            content_type=upload.content_type or "application/octet-stream",
            content=upload.read(),
        )


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_product_dto(
    dto_class: Type[ProductFields], data: Mapping[str, Any]
) -> ProductFields:
    """Build a product DTO from request data.

    Blank optional values are ignored for updates.  Pydantic failures are
    reported as ``ProductValidationError`` naming the first bad field.
    """
    values = {}
    for field in PRODUCT_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        if dto_class is UpdateProductDTO and isinstance(value, str) and not value.strip():
            continue
        values[field] = value

    try:
        return dto_class(**values)
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "non_field"
        message = error["msg"]
        if error["type"] == "missing":
            message = f"{field.capitalize()} is required."
        elif message.startswith("Value error, "):
            message = message[len("Value error, "):]
        else:
            message = f"{field}: {message}"
        raise ProductValidationError(field, message) from exc
