"""Status moves and administrative corrections of an order."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.ordering.order.stock_release import restore_order_stock

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=20)


@storefront.command(part_of="Order")
class UpdateOrder:
    order_id: Identifier(required=True)
    customer_name: String(max_length=100)
    customer_email: String(max_length=254)
    customer_phone: String(max_length=30)
    address: Text()  # JSON: {"street": ..., "city": ...}
    status: String(max_length=20)
    notes: Text()


def _move_to(order: Order, status: str) -> None:
    previous = order.status
    if order.change_status(status):
        restore_order_stock(order)
    if order.status != previous:
        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
        )


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        _move_to(order, command.status)
        repo.add(order)

    @handle(UpdateOrder)
    def update_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        order.revise(
            name=command.customer_name,
            email=command.customer_email,
            phone=command.customer_phone,
            address=json.loads(command.address) if command.address else None,
            notes=command.notes,
        )
        if command.status:
            _move_to(order, command.status)
        repo.add(order)
