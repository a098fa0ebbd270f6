"""Tests for deleting orders and giving their stock back."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from storefront.ordering.order.deletion import DeleteOrder
from storefront.ordering.order.order import Order
from storefront.ordering.order.stock_release import process_with_order_stock_locked


def _delete(order_id):
    process_with_order_stock_locked(DeleteOrder(order_id=order_id))


def test_deleting_restores_stock(place, make_product, stock_of):
    product_id = make_product(stock=10)
    placed = place([(product_id, 3)])

    _delete(placed["order_id"])

    assert stock_of(product_id) == 10
    with pytest.raises(ObjectNotFoundError):
        current_domain.repository_for(Order).get(placed["order_id"])


def test_deleting_cancelled_order_does_not_restore_again(place, make_product, stock_of, set_status):
    product_id = make_product(stock=10)
    placed = place([(product_id, 3)])
    set_status(placed["order_id"], "cancelled")

    _delete(placed["order_id"])

    assert stock_of(product_id) == 10


def test_deleting_reopened_order_does_not_restore_again(place, make_product, stock_of, set_status):
    product_id = make_product(stock=10)
    placed = place([(product_id, 3)])
    set_status(placed["order_id"], "cancelled")
    set_status(placed["order_id"], "processing")

    _delete(placed["order_id"])

    assert stock_of(product_id) == 10


def test_deleting_unknown_order():
    with pytest.raises(ObjectNotFoundError):
        _delete("missing")
