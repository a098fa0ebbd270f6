"""Order deletion: command and handler.

An order whose stock was never restored gives it back before the record is
removed.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.ordering.order.stock_release import restore_order_stock

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class DeleteOrder:
    order_id: Identifier(required=True)


@storefront.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if not order.stock_restored:
            restore_order_stock(order)
        repo._dao.delete(order)

        logger.info("Order deleted", order_id=str(order.id), order_number=order.order_number)
