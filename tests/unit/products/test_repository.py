"""Unit tests for ProductDjangoRepository.

Covers:
- CRUD operations (get_by_id, list, save, delete).
- Edge cases (malformed UUIDs, missing records).
- Driver failures translated into StoreUnavailable.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest
from django.db import OperationalError

from modules.products.exceptions import StoreUnavailable
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_product(**overrides) -> Product:
    defaults = {
        "name": "Mug",
        "description": "Ceramic mug",
        "price": Decimal("9.99"),
        "image_url": "https://res.cloudinary.com/c/image/upload/v1/store-products/mug.jpg",
    }
    defaults.update(overrides)
    product = Product(**defaults)
    product.save()
    return product


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)


# ===========================================================================
# get_by_id
# ===========================================================================


class TestGetById:
    def test_returns_existing_product(self, repo):
        product = _make_product()
        assert repo.get_by_id(str(product.id)) == product

    def test_returns_none_for_unknown_id(self, repo):
        assert repo.get_by_id(str(uuid4())) is None

    def test_returns_none_for_malformed_id(self, repo):
        assert repo.get_by_id("not-a-uuid") is None

    def test_database_error_raises_store_unavailable(self, repo):
        with patch.object(
            Product.objects, "filter", side_effect=OperationalError("db down")
        ):
            with pytest.raises(StoreUnavailable):
                repo.get_by_id(str(uuid4()))


# ===========================================================================
# list
# ===========================================================================


class TestList:
    def test_empty(self, repo):
        assert repo.list() == []

    def test_returns_all_products(self, repo):
        first = _make_product(name="Mug")
        second = _make_product(name="Plate")
        assert {p.id for p in repo.list()} == {first.id, second.id}

    def test_database_error_raises_store_unavailable(self, repo):
        with patch.object(
            Product.objects, "all", side_effect=OperationalError("db down")
        ):
            with pytest.raises(StoreUnavailable):
                repo.list()


# ===========================================================================
# save
# ===========================================================================


class TestSave:
    def test_inserts_new_product(self, repo):
        product = Product(
            name="Mug",
            description="Ceramic mug",
            price=Decimal("9.99"),
            image_url="https://res.cloudinary.com/c/image/upload/v1/store-products/a.jpg",
        )
        saved = repo.save(product)
        assert Product.objects.filter(id=saved.id).exists()

    def test_updates_existing_product(self, repo):
        product = _make_product()
        product.price = Decimal("12.50")
        repo.save(product)
        product.refresh_from_db()
        assert product.price == Decimal("12.50")

    def test_database_error_raises_store_unavailable(self, repo):
        product = Product(
            name="Mug",
            description="Ceramic mug",
            price=Decimal("9.99"),
            image_url="https://res.cloudinary.com/c/image/upload/v1/store-products/a.jpg",
        )
        with patch.object(Product, "save", side_effect=OperationalError("db down")):
            with pytest.raises(StoreUnavailable):
                repo.save(product)


# ===========================================================================
# delete
# ===========================================================================


class TestDelete:
    def test_deletes_existing_product(self, repo):
        product = _make_product()
        assert repo.delete(str(product.id)) is True
        assert not Product.objects.filter(id=product.id).exists()

    def test_returns_false_for_unknown_id(self, repo):
        assert repo.delete(str(uuid4())) is False

    def test_returns_false_for_malformed_id(self, repo):
        assert repo.delete("not-a-uuid") is False
