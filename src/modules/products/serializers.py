"""Product DRF serializers for API output.

Input never goes through a serializer: the views build Pydantic DTOs
from ``dtos.py`` and hand them to the Service Layer.  The output shape
is the catalog's wire format: ``{id, name, description, price, imageUrl}``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True
    )
    imageUrl = serializers.URLField(source="image_url", read_only=True)

    class Meta:
        model = Product
        fields = ["id", "name", "description", "price", "imageUrl"]
        read_only_fields = fields
