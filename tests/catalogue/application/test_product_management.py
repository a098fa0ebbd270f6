"""Tests for product commands issued by administrators."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.product.management import (
    CreateProduct,
    DeleteProduct,
    SetProductStock,
    UpdateProduct,
    process_stock_command,
)
from storefront.catalogue.product.product import Product
from storefront.shared.errors import NotFoundError


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


class TestCreateProduct:
    def test_creates_product_in_subcategory(self, make_product, subcategory_id):
        product = _product(make_product(price=19.99, stock=3, images=json.dumps(["a.jpg"])))

        assert product.subcategory_id == subcategory_id
        assert product.price == 19.99
        assert product.stock == 3
        assert product.image_urls == ["a.jpg"]

    def test_unknown_subcategory_is_rejected(self):
        command = CreateProduct(name="Lamp", description="Bright", price=10.0, subcategory_id="missing")
        with pytest.raises(NotFoundError) as exc:
            current_domain.process(command, asynchronous=False)
        assert exc.value.message == "Subcategory not found"
        assert exc.value.status_code == 400

    def test_negative_price_is_rejected(self, subcategory_id):
        with pytest.raises(ValidationError):
            CreateProduct(name="Lamp", description="Bright", price=-1.0, subcategory_id=subcategory_id)


class TestUpdateProduct:
    def test_partial_update_keeps_other_values(self, make_product):
        product_id = make_product(price=40.0, stock=5)
        process_stock_command(UpdateProduct(product_id=product_id, name="Renamed", discount=50.0))

        product = _product(product_id)
        assert product.name == "Renamed"
        assert product.price == 40.0
        assert product.price_after_discount == 20.0
        assert product.stock == 5

    def test_stock_can_be_set_through_update(self, make_product):
        product_id = make_product(stock=5)
        process_stock_command(UpdateProduct(product_id=product_id, stock=12))
        assert _product(product_id).stock == 12

    def test_update_can_deactivate(self, make_product):
        product_id = make_product()
        process_stock_command(UpdateProduct(product_id=product_id, is_active=False))
        assert _product(product_id).is_active is False


class TestSetProductStock:
    def test_sets_absolute_stock_level(self, make_product):
        product_id = make_product(stock=5)
        process_stock_command(SetProductStock(product_id=product_id, stock=0))
        assert _product(product_id).stock == 0

    def test_negative_stock_is_rejected(self, make_product):
        product_id = make_product(stock=5)
        with pytest.raises(ValidationError):
            SetProductStock(product_id=product_id, stock=-3)


class TestDeleteProduct:
    def test_removes_product(self, make_product):
        product_id = make_product()
        process_stock_command(DeleteProduct(product_id=product_id))
        with pytest.raises(ObjectNotFoundError):
            _product(product_id)
