"""Pydantic request/response schemas for the orders API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from storefront.api.schemas import ApiResponse, CamelModel

# --- Requests ---


class AddressSchema(CamelModel):
    street: str | None = ""
    city: str | None = ""


class CustomerInfoSchema(CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: AddressSchema | None = None


class OrderItemRequest(CamelModel):
    product: str | None = None
    quantity: int | None = None


class PlaceOrderRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customerInfo": {
                        "name": "Jane Doe",
                        "email": "jane@example.com",
                        "phone": "+15550100",
                        "address": {"street": "1 Main St", "city": "Springfield"},
                    },
                    "items": [{"product": "0b6c1f7e-3d2a-4e5b-9c8d-7a6b5c4d3e2f", "quantity": 2}],
                    "notes": "Leave at the door",
                    "discountCode": "SAVE20",
                    "deliveryFee": 5.0,
                }
            ]
        }
    }

    customer_info: CustomerInfoSchema | None = None
    items: list[OrderItemRequest] = Field(default_factory=list)
    notes: str | None = None
    discount_code: str | None = None
    delivery_fee: float | None = 0.0


class UpdateStatusRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "shipped"}]}}

    status: str | None = None


class UpdateOrderRequest(CamelModel):
    customer_info: CustomerInfoSchema | None = None
    status: str | None = None
    notes: str | None = None


class CheckDiscountRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"discountCode": "SAVE20", "totalAmount": 100.0}]}}

    discount_code: str | None = None
    total_amount: float | None = None


# --- Responses ---


class PlacedOrderData(CamelModel):
    order_number: str
    order_id: str
    total_amount: float
    status: str


class LineProductData(CamelModel):
    id: str
    name: str
    price: float
    images: list[str] = Field(default_factory=list)


class OrderLineData(CamelModel):
    product_id: str
    product_name: str
    quantity: int
    price: float
    product: LineProductData | None = None


class CustomerInfoData(CamelModel):
    name: str
    email: str
    phone: str
    address: AddressSchema


class OrderData(CamelModel):
    id: str
    order_number: str
    customer_info: CustomerInfoData
    items: list[OrderLineData]
    subtotal: float
    discount_code: str | None = None
    discount_amount: float
    delivery_fee: float
    total_amount: float
    notes: str = ""
    status: str
    user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TrackedOrderData(CamelModel):
    order_number: str
    status: str
    total_amount: float
    items: list[OrderLineData]
    created_at: datetime | None = None
    customer_name: str


class StatusStat(CamelModel):
    status: str
    count: int
    total_amount: float


class OrderListResponse(ApiResponse[list[OrderData]]):
    stats: list[StatusStat] = Field(default_factory=list)


class StatusBreakdown(CamelModel):
    status: str
    count: int
    revenue: float


class OrderStatsData(CamelModel):
    total_orders: int
    recent_orders: int
    total_revenue: float
    recent_revenue: float
    average_order_value: float
    status_breakdown: list[StatusBreakdown]


class DiscountCheckData(CamelModel):
    discount_code: str
    discount_value: float
    discount_amount: str
    original_amount: str
    final_amount: str


# --- Presentation helpers ---


def order_lines(order, products: dict) -> list[OrderLineData]:
    lines = []
    for line in order.items:
        product = products.get(str(line.product_id))
        lines.append(
            OrderLineData(
                product_id=str(line.product_id),
                product_name=line.product_name,
                quantity=line.quantity,
                price=line.unit_price,
                product=LineProductData(
                    id=str(product.id),
                    name=product.name,
                    price=product.price,
                    images=product.image_urls,
                )
                if product is not None
                else None,
            )
        )
    return lines


def order_data(order, products: dict) -> OrderData:
    return OrderData(
        id=str(order.id),
        order_number=order.order_number,
        customer_info=CustomerInfoData(**order.customer_info),
        items=order_lines(order, products),
        subtotal=order.subtotal,
        discount_code=order.discount_code,
        discount_amount=order.discount_amount or 0.0,
        delivery_fee=order.delivery_fee or 0.0,
        total_amount=order.total_amount,
        notes=order.notes or "",
        status=order.status,
        user_id=str(order.user_id) if order.user_id else None,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def tracked_order_data(order, products: dict) -> TrackedOrderData:
    """Public view of an order: the customer's contact details are reduced to a name."""
    return TrackedOrderData(
        order_number=order.order_number,
        status=order.status,
        total_amount=order.total_amount,
        items=order_lines(order, products),
        created_at=order.created_at,
        customer_name=order.customer_name,
    )
