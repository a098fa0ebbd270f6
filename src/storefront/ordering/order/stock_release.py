"""Putting an order's quantities back into stock.

Runs inside the unit of work of the command that cancels or deletes the
order, so the credit and the order change commit together.
"""

from collections import Counter

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.ordering.order.order import Order
from storefront.shared.locks import hold_locks

logger = structlog.get_logger(__name__)


def restore_order_stock(order: Order) -> None:
    quantities = Counter()
    for line in order.items:
        quantities[str(line.product_id)] += line.quantity

    repo = current_domain.repository_for(Product)
    for product_id, quantity in quantities.items():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            logger.warning(
                "Product no longer exists, stock not restored",
                order_id=str(order.id),
                product_id=product_id,
                quantity=quantity,
            )
            continue

        product.restore_stock(quantity, order_id=str(order.id))
        repo.add(product)

    logger.info("Order stock restored", order_id=str(order.id), order_number=order.order_number)


def process_with_order_stock_locked(command):
    """Process a command that may credit the stock of ``command.order_id``'s products."""
    order = current_domain.repository_for(Order).get(command.order_id)
    with hold_locks(line.product_id for line in order.items):
        return current_domain.process(command, asynchronous=False)
