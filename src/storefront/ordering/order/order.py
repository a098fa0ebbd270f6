"""Order aggregate: the record of a placed customer order.

Prices, product names and the customer's contact details are snapshotted
when the order is placed and never follow later catalogue edits. After
placement an order only changes through status moves and administrative
corrections of contact details or notes.

Statuses:
    pending, confirmed, processing, shipped, delivered, cancelled

Any status may follow any other. The first time an order enters ``cancelled``
the caller must put the ordered quantities back into stock. That happens at
most once per order: leaving ``cancelled`` does not take the stock out again,
so cancelling a second time gives nothing back.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.ordering.order.events import OrderDetailsRevised, OrderPlaced, OrderStatusChanged
from storefront.shared.errors import InvalidStateError
from storefront.shared.money import order_total, round_money


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(status.value for status in cls)
            raise InvalidStateError(f"Invalid status. Valid statuses: {valid}")


@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=200)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return round_money(self.unit_price * self.quantity)


@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=30, unique=True)
    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=30)
    customer_street = String(max_length=255, default="")
    customer_city = String(max_length=100, default="")
    items = HasMany(OrderLine)
    subtotal = Float(required=True, min_value=0.0)
    discount_code = String(max_length=50)
    discount_amount = Float(default=0.0, min_value=0.0)
    delivery_fee = Float(default=0.0, min_value=0.0)
    total_amount = Float(required=True, min_value=0.0)
    notes = Text(default="")
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    stock_restored = Boolean(default=False)
    user_id = Identifier()
    created_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)

    @invariant.post
    def total_follows_pricing(self):
        expected = order_total(self.subtotal, self.discount_amount or 0.0, self.delivery_fee or 0.0)
        if self.total_amount != expected:
            raise ValidationError({"total_amount": ["Total must equal subtotal - discount + delivery fee"]})

    @classmethod
    def place(
        cls,
        order_number,
        contact,
        lines,
        discount_code=None,
        discount_amount=0.0,
        delivery_fee=0.0,
        notes=None,
        user_id=None,
    ):
        """Build a pending order from priced lines.

        Args:
            contact: dict with name, email, phone and optional street, city.
            lines: list of dicts with product_id, product_name, quantity,
                unit_price (the price at the time of ordering).
        """
        subtotal = round_money(sum(line["unit_price"] * line["quantity"] for line in lines))
        discount_amount = round_money(discount_amount or 0.0)
        delivery_fee = round_money(delivery_fee or 0.0)
        now = datetime.now()

        order = cls(
            order_number=order_number,
            customer_name=contact["name"].strip(),
            customer_email=contact["email"].strip().lower(),
            customer_phone=contact["phone"].strip(),
            customer_street=(contact.get("street") or "").strip(),
            customer_city=(contact.get("city") or "").strip(),
            items=[OrderLine(**line) for line in lines],
            subtotal=subtotal,
            discount_code=discount_code or None,
            discount_amount=discount_amount,
            delivery_fee=delivery_fee,
            total_amount=order_total(subtotal, discount_amount, delivery_fee),
            notes=(notes or "").strip(),
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order.order_number,
                user_id=user_id,
                item_count=len(lines),
                subtotal=order.subtotal,
                discount_code=order.discount_code,
                discount_amount=order.discount_amount,
                delivery_fee=order.delivery_fee,
                total_amount=order.total_amount,
                placed_at=datetime.now(UTC),
            )
        )
        return order

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED.value

    @property
    def customer_info(self) -> dict:
        return {
            "name": self.customer_name,
            "email": self.customer_email,
            "phone": self.customer_phone,
            "address": {"street": self.customer_street or "", "city": self.customer_city or ""},
        }

    def change_status(self, status) -> bool:
        """Move to ``status``.

        Returns True when the ordered quantities have to go back into stock:
        the move enters ``cancelled`` and the stock was never restored before.
        """
        target = OrderStatus.parse(status)
        previous = self.status
        if target.value == previous:
            return False

        self.status = target.value
        self.updated_at = datetime.now()
        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                previous_status=previous,
                new_status=target.value,
                changed_at=datetime.now(UTC),
            )
        )
        if target == OrderStatus.CANCELLED and not self.stock_restored:
            self.stock_restored = True
            return True
        return False

    def revise(self, name=None, email=None, phone=None, address=None, notes=None):
        """Correct contact details or notes. ``address`` replaces street and city together."""
        if name:
            self.customer_name = name.strip()
        if email:
            self.customer_email = email.strip().lower()
        if phone:
            self.customer_phone = phone.strip()
        if address is not None:
            self.customer_street = (address.get("street") or "").strip()
            self.customer_city = (address.get("city") or "").strip()
        if notes is not None:
            self.notes = notes.strip()

        self.updated_at = datetime.now()
        self.raise_(
            OrderDetailsRevised(
                order_id=self.id,
                order_number=self.order_number,
                revised_at=datetime.now(UTC),
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_number(self, order_number: str) -> Order | None:
        return self._dao.query.filter(order_number=order_number).all().first
