"""Catalog page forms.

``ProductForm`` mirrors the service-side constraints so the user gets
feedback before anything is uploaded; the Service Layer still validates
everything it receives.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from django import forms
from django.conf import settings

from modules.products.dtos import (
    CreateProductDTO,
    ImageUploadDTO,
    UpdateProductDTO,
    build_product_dto,
)
from modules.products.models import Product


class ProductForm(forms.Form):
    name = forms.CharField(max_length=255)
    description = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))
    price = forms.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )
    image = forms.FileField(
        required=False,
        widget=forms.FileInput(attrs={"accept": "image/*"}),
    )

    def __init__(self, *args, require_image: bool = True, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.require_image = require_image
        self.fields["image"].required = require_image

    @classmethod
    def for_product(cls, product: Product) -> ProductForm:
        """Unbound edit form pre-filled from an existing product."""
        return cls(
            initial={
                "name": product.name,
                "description": product.description,
                "price": product.price,
            },
            require_image=False,
        )

    def clean_image(self):
        image = self.cleaned_data.get("image")
        if not image:
            return None
        if image.size > settings.MAX_IMAGE_UPLOAD_SIZE:
            limit_mb = settings.MAX_IMAGE_UPLOAD_SIZE // (1024 * 1024)
            raise forms.ValidationError(f"Image size should be less than {limit_mb}MB.")
        content_type = getattr(image, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise forms.ValidationError("Please upload an image file.")
        return image

    # ------------------------------------------------------------------
    # DTO conversion (call only after ``is_valid()``)
    # ------------------------------------------------------------------

    def to_create_dto(self) -> CreateProductDTO:
        return build_product_dto(CreateProductDTO, self.cleaned_data)

    def to_update_dto(self) -> UpdateProductDTO:
        return build_product_dto(UpdateProductDTO, self.cleaned_data)

    def image_upload(self) -> Optional[ImageUploadDTO]:
        image = self.cleaned_data.get("image")
        return ImageUploadDTO.from_uploaded_file(image) if image else None
