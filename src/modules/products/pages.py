"""Server-rendered catalog pages.

Every successful mutation redirects back to the list, which re-reads the
whole catalog, and leaves a one-shot notification in
``django.contrib.messages``.  Failures also become notifications; the
list page falls back to an empty catalog instead of erroring out.
"""

from __future__ import annotations

import structlog
from django.contrib import messages
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods

from modules.products import providers
from modules.products.exceptions import (
    ProductNotFound,
    ProductValidationError,
    StoreUnavailable,
)
from modules.products.forms import ProductForm
from shared.domain.media import MediaStoreError

logger = structlog.get_logger(__name__)

SAVE_FAILED = "Failed to save product"
LIST_URL = "catalog:list"


def _apply_service_error(request: HttpRequest, form: ProductForm, exc: Exception) -> None:
    if isinstance(exc, ProductValidationError):
        field = exc.field if exc.field in form.fields else None
        form.add_error(field, exc.message)
        messages.error(request, exc.message)
    else:
        logger.error("catalog_page.save_failed", error=exc.__class__.__name__)
        messages.error(request, SAVE_FAILED)


@require_GET
def product_list(request: HttpRequest) -> HttpResponse:
    try:
        products = providers.build_product_service().list_products()
    except StoreUnavailable:
        messages.error(request, "Failed to fetch products")
        products = []
    return render(request, "products/product_list.html", {"products": products})


@require_http_methods(["GET", "POST"])
def product_create(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = ProductForm(request.POST, request.FILES, require_image=True)
    else:
        form = ProductForm(require_image=True)

    if form.is_bound and form.is_valid():
        try:
            providers.build_product_service().create_product(
                form.to_create_dto(), form.image_upload()
            )
        except (ProductValidationError, MediaStoreError, StoreUnavailable) as exc:
            _apply_service_error(request, form, exc)
        else:
            messages.success(request, "Product added successfully")
            return redirect(LIST_URL)

    return render(
        request, "products/product_form.html", {"form": form, "is_editing": False}
    )


@require_http_methods(["GET", "POST"])
def product_edit(request: HttpRequest, pk: str) -> HttpResponse:
    service = providers.build_product_service()
    try:
        product = service.get_product(pk)
    except (ProductNotFound, StoreUnavailable) as exc:
        messages.error(
            request,
            "Product not found" if isinstance(exc, ProductNotFound) else "Failed to load product",
        )
        return redirect(LIST_URL)

    if request.method == "POST":
        form = ProductForm(request.POST, request.FILES, require_image=False)
        if form.is_valid():
            try:
                service.update_product(pk, form.to_update_dto(), form.image_upload())
            except ProductNotFound:
                messages.error(request, "Product not found")
                return redirect(LIST_URL)
            except (ProductValidationError, MediaStoreError, StoreUnavailable) as exc:
                _apply_service_error(request, form, exc)
            else:
                messages.success(request, "Product updated successfully")
                return redirect(LIST_URL)
    else:
        form = ProductForm.for_product(product)

    return render(
        request,
        "products/product_form.html",
        {"form": form, "is_editing": True, "product": product},
    )


@require_http_methods(["GET", "POST"])
def product_delete(request: HttpRequest, pk: str) -> HttpResponse:
    """GET asks for confirmation; only POST deletes."""
    service = providers.build_product_service()
    try:
        if request.method == "POST":
            service.delete_product(pk)
            messages.success(request, "Product deleted successfully")
            return redirect(LIST_URL)
        product = service.get_product(pk)
    except ProductNotFound:
        messages.error(request, "Product not found")
        return redirect(LIST_URL)
    except StoreUnavailable:
        messages.error(request, "Failed to delete product")
        return redirect(LIST_URL)

    return render(request, "products/product_confirm_delete.html", {"product": product})
