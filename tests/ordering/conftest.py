import json

import pytest


def contact(**overrides):
    info = {
        "customer_name": "Jane Doe",
        "customer_email": "jane@example.com",
        "customer_phone": "+15550100",
        "customer_street": "1 Main St",
        "customer_city": "Springfield",
    }
    info.update(overrides)
    return info


@pytest.fixture()
def place():
    """Place an order through the locked entry point and return its result dict."""
    from storefront.ordering.order.placement import PlaceOrder, place_order

    def _place(items, discount_code=None, delivery_fee=0.0, user_id=None, notes=None, **contact_overrides):
        command = PlaceOrder(
            **contact(**contact_overrides),
            items=json.dumps([{"product_id": product_id, "quantity": quantity} for product_id, quantity in items]),
            discount_code=discount_code,
            delivery_fee=delivery_fee,
            user_id=user_id,
            notes=notes,
        )
        return place_order(command)

    return _place


@pytest.fixture()
def stock_of():
    from protean import current_domain

    from storefront.catalogue.product.product import Product

    def _stock(product_id):
        return current_domain.repository_for(Product).get(product_id).stock

    return _stock


@pytest.fixture()
def set_status():
    from storefront.ordering.order.status import UpdateOrderStatus
    from storefront.ordering.order.stock_release import process_with_order_stock_locked

    def _set(order_id, status):
        return process_with_order_stock_locked(UpdateOrderStatus(order_id=order_id, status=status))

    return _set
