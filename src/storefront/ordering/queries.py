"""Read side of the order ledger: lookups, listings and revenue figures."""

from collections import defaultdict
from datetime import datetime, timedelta

from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.catalogue.product.product import Product
from storefront.ordering.order.order import Order, OrderStatus
from storefront.shared.errors import NotFoundError
from storefront.shared.money import round_money
from storefront.shared.pagination import Page, fetch_page, iterate_all, resolve_sort

ORDER_SORT_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "totalAmount": "total_amount",
    "total_amount": "total_amount",
    "orderNumber": "order_number",
    "status": "status",
}


def _naive(moment: datetime | None) -> datetime | None:
    """Orders are stamped with naive local time; compare like with like."""
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def _orders():
    return current_domain.repository_for(Order)._dao.query


def get_order(order_id: str) -> Order:
    return current_domain.repository_for(Order).get(order_id)


def track_order(order_number: str) -> Order:
    order = current_domain.repository_for(Order).find_by_number(order_number)
    if order is None:
        raise NotFoundError("Order not found")
    return order


def line_products(orders) -> dict[str, Product]:
    """Current catalogue records for the products on ``orders``' lines.

    Products deleted since the order was placed are simply absent.
    """
    product_ids = {str(line.product_id) for order in orders for line in order.items}
    if not product_ids:
        return {}
    products = current_domain.repository_for(Product)._dao.query.filter(id__in=list(product_ids)).all().items
    return {str(product.id): product for product in products}


def list_orders(
    page: int = 1,
    limit: int = 20,
    status: str | None = None,
    search: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    sort: str | None = None,
) -> Page:
    ordering = resolve_sort(sort, ORDER_SORT_FIELDS)
    query = _orders()

    if status:
        query = query.filter(status=OrderStatus.parse(status).value)
    if search and search.strip():
        term = search.strip()
        query = query.filter(
            Q(customer_name__icontains=term) | Q(customer_email__icontains=term) | Q(order_number__icontains=term)
        )
    if start_date:
        query = query.filter(created_at__gte=_naive(start_date))
    if end_date:
        query = query.filter(created_at__lte=_naive(end_date))

    return fetch_page(query.order_by(ordering), page, limit)


def status_summary() -> list[dict]:
    """Order count and summed totals per status, across all orders."""
    groups = defaultdict(lambda: {"count": 0, "total_amount": 0.0})
    for order in iterate_all(_orders().order_by("created_at")):
        group = groups[order.status]
        group["count"] += 1
        group["total_amount"] += order.total_amount

    return [
        {"status": status, "count": group["count"], "total_amount": round_money(group["total_amount"])}
        for status, group in sorted(groups.items())
    ]


def orders_of_user(user_id: str) -> list[Order]:
    return list(iterate_all(_orders().filter(user_id=str(user_id)).order_by("-created_at")))


def admin_stats(period_days: int = 30, now: datetime | None = None) -> dict:
    """Totals over all orders plus figures for the last ``period_days`` days.

    Recent revenue leaves cancelled orders out; the all-time revenue and
    average do not, matching what the dashboard has always shown.
    """
    since = (now or datetime.now()) - timedelta(days=period_days)

    total_orders = 0
    total_revenue = 0.0
    recent_orders = 0
    recent_revenue = 0.0
    for order in iterate_all(_orders().order_by("created_at")):
        total_orders += 1
        total_revenue += order.total_amount
        if order.created_at and order.created_at >= since:
            recent_orders += 1
            if not order.is_cancelled:
                recent_revenue += order.total_amount

    return {
        "total_orders": total_orders,
        "recent_orders": recent_orders,
        "total_revenue": round_money(total_revenue),
        "recent_revenue": round_money(recent_revenue),
        "average_order_value": round_money(total_revenue / total_orders) if total_orders else 0.0,
        "status_breakdown": [
            {"status": entry["status"], "count": entry["count"], "revenue": entry["total_amount"]}
            for entry in status_summary()
        ],
    }
