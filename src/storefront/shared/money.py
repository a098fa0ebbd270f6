"""Helpers for monetary amounts.

Amounts are plain floats, stored rounded to cents. ``percentage_of`` and
``order_total`` hold the pricing rules shared by checkout and the discount
preview.
"""


def round_money(amount: float) -> float:
    return round(float(amount), 2)


def format_money(amount: float) -> str:
    """Render an amount with exactly two decimals, e.g. ``"20.00"``."""
    return f"{round_money(amount):.2f}"


def percentage_of(amount: float, percentage: float) -> float:
    return round_money(amount * percentage / 100)


def order_total(subtotal: float, discount_amount: float = 0.0, delivery_fee: float = 0.0) -> float:
    """Grand total of an order; never negative."""
    return round_money(max(0.0, subtotal - discount_amount + delivery_fee))
