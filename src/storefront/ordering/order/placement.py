"""Order placement: command, handler and the locked entry point.

Placement fails fast in this order: request shape, products (existence,
active flag, stock), discount code, then persistence. Nothing is written
until every check has passed; the order, the customer's discount redemption
and the stock debits are then committed in the handler's unit of work while
the caller holds the locks of every product on the order and of the
signed-in customer.
"""

import json
from collections import Counter

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.discounts.evaluation import evaluate_discount
from storefront.domain import storefront
from storefront.identity.user.user import User
from storefront.ordering.order.numbering import next_free_order_number
from storefront.ordering.order.order import Order
from storefront.shared.errors import AuthorizationError, NotFoundError, StorefrontError
from storefront.shared.locks import customer_key, hold_locks
from storefront.shared.money import round_money

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_name: String(required=True, max_length=100)
    customer_email: String(required=True, max_length=254)
    customer_phone: String(required=True, max_length=30)
    customer_street: String(max_length=255)
    customer_city: String(max_length=100)
    items: Text(required=True)  # JSON: [{"product_id": ..., "quantity": ...}]
    notes: Text()
    discount_code: String(max_length=50)
    delivery_fee: Float(default=0.0, min_value=0.0)
    user_id: Identifier()  # set only for signed-in customers


def requested_items(items_json: str) -> list[dict]:
    """Decode and validate the requested lines of a PlaceOrder command."""
    try:
        items = json.loads(items_json) if items_json else []
    except ValueError:
        raise ValidationError({"items": ["Items must be a JSON list"]})

    if not isinstance(items, list) or not items:
        raise ValidationError({"items": ["Order must contain at least one item"]})

    for item in items:
        quantity = item.get("quantity") if isinstance(item, dict) else None
        if (
            not isinstance(item, dict)
            or not item.get("product_id")
            or not isinstance(quantity, int)
            or isinstance(quantity, bool)
            or quantity <= 0
        ):
            raise ValidationError({"items": ["Each item must have a valid product and quantity"]})
    return items


def _orderable_product(repo, product_id) -> Product:
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError:
        product = None
    if product is None or not product.is_active:
        raise NotFoundError(f"Product {product_id} not found or inactive", status_code=400)
    return product


def _require_contact(command) -> None:
    for field in ("customer_name", "customer_email", "customer_phone"):
        if not (getattr(command, field) or "").strip():
            raise ValidationError({field: ["Customer name, email, and phone are required"]})


def _signed_in_customer(user_id) -> User | None:
    if not user_id:
        return None
    try:
        customer = current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise AuthorizationError("User not found")
    if not customer.is_active:
        raise AuthorizationError("User account is inactive")
    return customer


def place_order(command: PlaceOrder) -> dict:
    """Process ``command`` while holding the locks of its products and customer.

    The request is screened first, so that no lock is taken for ids that do
    not name an orderable product. The handler repeats every check under the
    locks.
    """
    try:
        _require_contact(command)
        product_repo = current_domain.repository_for(Product)
        keys = list(dict.fromkeys(str(item["product_id"]) for item in requested_items(command.items)))
        for product_id in keys:
            _orderable_product(product_repo, product_id)
        if command.user_id:
            keys.append(customer_key(command.user_id))

        with hold_locks(keys):
            return current_domain.process(command, asynchronous=False)
    except (StorefrontError, ValidationError) as exc:
        logger.warning(
            "Order placement rejected",
            customer_email=command.customer_email,
            error=type(exc).__name__,
            reason=getattr(exc, "message", None) or str(exc),
        )
        raise


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        _require_contact(command)
        items = requested_items(command.items)

        product_repo = current_domain.repository_for(Product)
        products: dict[str, Product] = {}
        requested = Counter()
        lines = []
        for item in items:
            product_id = str(item["product_id"])
            if product_id not in products:
                products[product_id] = _orderable_product(product_repo, product_id)
            product = products[product_id]

            requested[product_id] += item["quantity"]
            product.ensure_available(requested[product_id])

            lines.append(
                {
                    "product_id": product_id,
                    "product_name": product.name,
                    "quantity": item["quantity"],
                    "unit_price": product.price,
                }
            )

        subtotal = round_money(sum(line["unit_price"] * line["quantity"] for line in lines))

        customer = _signed_in_customer(command.user_id)
        quote = None
        if command.discount_code:
            quote = evaluate_discount(command.discount_code, subtotal, customer=customer)

        order_repo = current_domain.repository_for(Order)
        order = Order.place(
            order_number=next_free_order_number(order_repo),
            contact={
                "name": command.customer_name,
                "email": command.customer_email,
                "phone": command.customer_phone,
                "street": command.customer_street,
                "city": command.customer_city,
            },
            lines=lines,
            discount_code=quote.code if quote else None,
            discount_amount=quote.discount_amount if quote else 0.0,
            delivery_fee=command.delivery_fee or 0.0,
            notes=command.notes,
            user_id=str(customer.id) if customer else None,
        )

        if quote and customer is not None:
            customer.record_discount_use(quote.code, order_id=str(order.id))
            current_domain.repository_for(User).add(customer)

        order_repo.add(order)

        for product_id, quantity in requested.items():
            product = products[product_id]
            product.debit_stock(quantity, order_id=str(order.id))
            product_repo.add(product)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            total_amount=order.total_amount,
            discount_code=order.discount_code,
            user_id=order.user_id,
        )
        return {
            "order_number": order.order_number,
            "order_id": str(order.id),
            "total_amount": order.total_amount,
            "status": order.status,
        }
