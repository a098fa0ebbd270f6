"""Tests for the Product aggregate: pricing and stock movements."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.product.events import StockDebited, StockLevelSet, StockRestored
from storefront.catalogue.product.product import Product
from storefront.shared.errors import InsufficientStockError


def _make_product(**overrides):
    defaults = {
        "name": "  Wireless Headphones ",
        "description": "Noise cancelling",
        "price": 200.0,
        "subcategory_id": "sub-001",
        "stock": 10,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_name_is_trimmed(self):
        assert _make_product().name == "Wireless Headphones"

    def test_defaults(self):
        product = _make_product()
        assert product.is_active is True
        assert product.product_type == "normal"
        assert product.image_urls == []

    def test_price_after_discount_follows_discount(self):
        product = _make_product(price=200.0, discount=15.0)
        assert product.price_after_discount == 170.0

    def test_price_after_discount_without_discount(self):
        assert _make_product(price=99.99).price_after_discount == 99.99

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(stock=-1)

    def test_images_are_kept_in_order(self):
        product = _make_product(images=["a.jpg", "b.jpg"])
        assert product.image_urls == ["a.jpg", "b.jpg"]


class TestProductUpdate:
    def test_price_change_recomputes_discounted_price(self):
        product = _make_product(price=100.0, discount=10.0)
        product.update(price=50.0)
        assert product.price_after_discount == 45.0

    def test_discount_change_recomputes_discounted_price(self):
        product = _make_product(price=100.0)
        product.update(discount=25.0)
        assert product.price_after_discount == 75.0

    def test_none_values_are_ignored(self):
        product = _make_product()
        product.update(name=None, featured=True)
        assert product.name == "Wireless Headphones"
        assert product.featured is True

    def test_stock_is_not_updatable_through_update(self):
        product = _make_product()
        with pytest.raises(ValidationError) as exc:
            product.update(stock=5)
        assert "stock" in exc.value.messages

    def test_images_are_replaced(self):
        product = _make_product(images=["a.jpg"])
        product.update(images=[])
        assert product.image_urls == []


class TestStockMovements:
    def test_debit_reduces_stock_and_raises_event(self):
        product = _make_product(stock=10)
        product.debit_stock(3, order_id="order-1")

        assert product.stock == 7
        event = product._events[-1]
        assert isinstance(event, StockDebited)
        assert event.remaining_stock == 7
        assert event.quantity == 3

    def test_debit_of_entire_stock_leaves_zero(self):
        product = _make_product(stock=4)
        product.debit_stock(4, order_id="order-1")
        assert product.stock == 0

    def test_debit_beyond_stock_is_refused(self):
        product = _make_product(stock=10)
        with pytest.raises(InsufficientStockError) as exc:
            product.debit_stock(11, order_id="order-1")

        assert exc.value.available == 10
        assert exc.value.requested == 11
        assert "Insufficient stock for Wireless Headphones" in exc.value.message
        assert product.stock == 10

    def test_non_positive_quantities_are_refused(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.debit_stock(0, order_id="order-1")
        with pytest.raises(ValidationError):
            product.restore_stock(-2, order_id="order-1")

    def test_restore_adds_stock_back(self):
        product = _make_product(stock=7)
        product.restore_stock(3, order_id="order-1")

        assert product.stock == 10
        assert isinstance(product._events[-1], StockRestored)

    def test_set_stock_records_previous_level(self):
        product = _make_product(stock=7)
        product.set_stock(40)

        assert product.stock == 40
        event = product._events[-1]
        assert isinstance(event, StockLevelSet)
        assert event.previous_stock == 7
        assert event.new_stock == 40

    def test_set_stock_refuses_negative(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.set_stock(-1)

    def test_ensure_available_checks_cumulative_quantity(self):
        product = _make_product(stock=5)
        product.ensure_available(5)
        with pytest.raises(InsufficientStockError):
            product.ensure_available(6)
