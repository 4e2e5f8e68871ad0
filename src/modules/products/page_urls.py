"""Catalog page URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.products import pages

app_name = "catalog"

urlpatterns = [
    path("", pages.product_list, name="list"),
    path("catalog/new", pages.product_create, name="create"),
    path("catalog/<str:pk>/edit", pages.product_edit, name="edit"),
    path("catalog/<str:pk>/delete", pages.product_delete, name="delete"),
]
