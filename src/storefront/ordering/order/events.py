"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer order was accepted and its stock debited."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    user_id: Identifier()
    item_count: Integer(required=True)
    subtotal: Float(required=True)
    discount_code: String()
    discount_amount: Float(default=0.0)
    delivery_fee: Float(default=0.0)
    total_amount: Float(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderDetailsRevised:
    """An administrator corrected the contact details or notes of an order."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    revised_at: DateTime(required=True)
