"""Discount code checks shared by order placement and the checkout preview.

Both paths run the same sequence against the registry: the code must exist,
be active and not expired, and (for a signed-in customer) not have been used
by that customer before. Only placement records the use.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.discounts.discount_code import DiscountCode
from storefront.shared.errors import AlreadyUsedError, InvalidStateError, NotFoundError
from storefront.shared.money import format_money, percentage_of, round_money


@dataclass(frozen=True)
class DiscountQuote:
    code: str
    percentage: float
    discount_amount: float
    original_amount: float

    @property
    def final_amount(self) -> float:
        return round_money(max(0.0, self.original_amount - self.discount_amount))

    def formatted(self) -> dict:
        return {
            "discount_code": self.code,
            "discount_value": self.percentage,
            "discount_amount": format_money(self.discount_amount),
            "original_amount": format_money(self.original_amount),
            "final_amount": format_money(self.final_amount),
        }


def evaluate_discount(code: str, subtotal: float, customer=None) -> DiscountQuote:
    """Validate ``code`` against ``subtotal`` without changing anything.

    ``customer`` is the signed-in end user, if any; other callers (guests,
    administrators) are never checked for prior use.
    """
    discount = current_domain.repository_for(DiscountCode).find_by_code(code)
    if discount is None:
        raise NotFoundError("Invalid discount code")
    if not discount.is_active:
        raise InvalidStateError("Discount code is not active")
    if discount.is_expired():
        raise InvalidStateError("Discount code has expired")
    if customer is not None and customer.has_used(discount.code):
        raise AlreadyUsedError("You have already used this discount code")

    return DiscountQuote(
        code=discount.code,
        percentage=discount.percentage,
        discount_amount=percentage_of(subtotal, discount.percentage),
        original_amount=round_money(subtotal),
    )
