"""FastAPI endpoints for placing, tracking and administering orders.

Fixed paths (``/user``, ``/track/...``, ``/admin/stats``, ``/check-discount``)
are declared before ``/{order_id}`` so they are not captured by it.
"""

import json
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.schemas import ApiResponse, MessageResponse, PaginationSchema
from storefront.api.security import current_principal, optional_principal, require_admin, require_customer
from storefront.discounts.evaluation import evaluate_discount
from storefront.identity.authentication import load_user
from storefront.identity.principal import Principal
from storefront.ordering import queries
from storefront.ordering.api.schemas import (
    CheckDiscountRequest,
    DiscountCheckData,
    OrderData,
    OrderListResponse,
    OrderStatsData,
    PlacedOrderData,
    PlaceOrderRequest,
    StatusStat,
    TrackedOrderData,
    UpdateOrderRequest,
    UpdateStatusRequest,
    order_data,
    tracked_order_data,
)
from storefront.ordering.order.deletion import DeleteOrder
from storefront.ordering.order.placement import PlaceOrder, place_order
from storefront.ordering.order.status import UpdateOrder, UpdateOrderStatus
from storefront.ordering.order.stock_release import process_with_order_stock_locked
from storefront.shared.errors import AuthorizationError

router = APIRouter(prefix="/orders", tags=["orders"])


def _order_data(order_id: str) -> OrderData:
    order = queries.get_order(order_id)
    return order_data(order, queries.line_products([order]))


@router.post("", status_code=201, response_model=ApiResponse[PlacedOrderData], response_model_exclude_none=True)
async def create_order(body: PlaceOrderRequest, principal: Principal | None = Depends(optional_principal)):
    """Place an order. Guests may order; a customer's token ties the order to them."""
    info = body.customer_info
    address = info.address if info else None
    customer = load_user(principal) if principal is not None and principal.is_customer else None

    command = PlaceOrder(
        customer_name=info.name if info else None,
        customer_email=info.email if info else None,
        customer_phone=info.phone if info else None,
        customer_street=address.street if address else None,
        customer_city=address.city if address else None,
        items=json.dumps([{"product_id": item.product, "quantity": item.quantity} for item in body.items]),
        notes=body.notes,
        discount_code=body.discount_code,
        delivery_fee=body.delivery_fee or 0.0,
        user_id=str(customer.id) if customer else None,
    )
    placed = place_order(command)
    return ApiResponse[PlacedOrderData](message="Order created successfully", data=PlacedOrderData(**placed))


@router.get(
    "",
    response_model=OrderListResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def list_orders(
    page: int = 1,
    limit: int = 20,
    status: str | None = None,
    search: str | None = None,
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
    sort: str | None = None,
):
    result = queries.list_orders(
        page=page,
        limit=limit,
        status=status,
        search=search,
        start_date=start_date,
        end_date=end_date,
        sort=sort,
    )
    products = queries.line_products(result.items)
    return OrderListResponse(
        data=[order_data(order, products) for order in result.items],
        pagination=PaginationSchema(**result.pagination()),
        stats=[StatusStat(**entry) for entry in queries.status_summary()],
    )


@router.get("/user", response_model=ApiResponse[list[OrderData]], response_model_exclude_none=True)
async def list_my_orders(principal: Principal = Depends(require_customer)):
    orders = queries.orders_of_user(principal.user_id)
    products = queries.line_products(orders)
    return ApiResponse[list[OrderData]](data=[order_data(order, products) for order in orders])


@router.get(
    "/track/{order_number}",
    response_model=ApiResponse[TrackedOrderData],
    response_model_exclude_none=True,
)
async def track_order(order_number: str):
    order = queries.track_order(order_number)
    return ApiResponse[TrackedOrderData](data=tracked_order_data(order, queries.line_products([order])))


@router.get(
    "/admin/stats",
    response_model=ApiResponse[OrderStatsData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def order_stats(period: int = Query(30, ge=1)):
    return ApiResponse[OrderStatsData](data=OrderStatsData(**queries.admin_stats(period_days=period)))


@router.post("/check-discount", response_model=ApiResponse[DiscountCheckData], response_model_exclude_none=True)
async def check_discount(body: CheckDiscountRequest, principal: Principal = Depends(current_principal)):
    """Preview a discount code against an amount without redeeming it."""
    if not body.discount_code:
        raise ValidationError({"discount_code": ["Discount code is required"]})
    if not body.total_amount or body.total_amount <= 0:
        raise ValidationError({"total_amount": ["Valid total amount is required"]})

    customer = load_user(principal) if principal.is_customer else None
    quote = evaluate_discount(body.discount_code, body.total_amount, customer=customer)
    return ApiResponse[DiscountCheckData](
        message="Discount code is valid",
        data=DiscountCheckData(**quote.formatted()),
    )


@router.get("/{order_id}", response_model=ApiResponse[OrderData], response_model_exclude_none=True)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)):
    """An order with its line products. Customers may only read their own orders."""
    order = queries.get_order(order_id)
    if not principal.is_admin and str(order.user_id or "") != principal.user_id:
        raise AuthorizationError.forbidden()
    return ApiResponse[OrderData](data=order_data(order, queries.line_products([order])))


@router.patch(
    "/{order_id}/status",
    response_model=ApiResponse[OrderData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def update_order_status(order_id: str, body: UpdateStatusRequest):
    if not body.status:
        raise ValidationError({"status": ["Status is required"]})
    process_with_order_stock_locked(UpdateOrderStatus(order_id=order_id, status=body.status))
    return ApiResponse[OrderData](message="Order status updated successfully", data=_order_data(order_id))


@router.put(
    "/{order_id}",
    response_model=ApiResponse[OrderData],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def update_order(order_id: str, body: UpdateOrderRequest):
    info = body.customer_info
    address = info.address if info else None
    command = UpdateOrder(
        order_id=order_id,
        customer_name=info.name if info else None,
        customer_email=info.email if info else None,
        customer_phone=info.phone if info else None,
        address=json.dumps({"street": address.street, "city": address.city}) if address else None,
        status=body.status,
        notes=body.notes,
    )
    process_with_order_stock_locked(command)
    return ApiResponse[OrderData](message="Order updated successfully", data=_order_data(order_id))


@router.delete("/{order_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_order(order_id: str):
    process_with_order_stock_locked(DeleteOrder(order_id=order_id))
    return MessageResponse(message="Order deleted successfully")
