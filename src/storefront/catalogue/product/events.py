"""Domain events for the Product aggregate.

Only stock movements are published; they are the facts other parts of the
system (and an eventual reconciliation job) care about.
"""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Product")
class StockDebited:
    """Units were taken out of stock for an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    quantity: Integer(required=True)
    remaining_stock: Integer(required=True)
    debited_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockRestored:
    """Units of a cancelled or deleted order were put back into stock."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    quantity: Integer(required=True)
    new_stock: Integer(required=True)
    restored_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockLevelSet:
    """An administrator overwrote the stock count."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    set_at: DateTime(required=True)
