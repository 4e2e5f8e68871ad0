"""Product model: the single entity of the catalog.

Business rules implemented:
- Price must be greater than zero (validator + CHECK constraint).
- Name and description must not be blank.
- ``image_url`` always points at the hosted image; it is set on creation
  and only ever replaced, never cleared.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Catalog entry with a remotely hosted image."""

    name = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    image_url = models.URLField(max_length=500)

    class Meta:
        db_table = "products"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if not (self.name or "").strip():
            raise ValidationError({"name": "Name must not be empty."})
        if not (self.description or "").strip():
            raise ValidationError({"description": "Description must not be empty."})
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})

    def __str__(self) -> str:
        return self.name
