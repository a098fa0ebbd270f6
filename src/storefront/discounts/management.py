"""Discount code administration: commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.discounts.discount_code import DiscountCode
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="DiscountCode")
class CreateDiscountCode:
    code: String(required=True, max_length=50)
    percentage: Float(required=True, min_value=0.0, max_value=100.0)
    expires_at: DateTime()


@storefront.command(part_of="DiscountCode")
class UpdateDiscountCode:
    discount_code_id: Identifier(required=True)
    code: String(max_length=50)
    percentage: Float(min_value=0.0, max_value=100.0)
    expires_at: DateTime()
    is_active: Boolean()


@storefront.command(part_of="DiscountCode")
class DeleteDiscountCode:
    discount_code_id: Identifier(required=True)


def _ensure_code_is_free(repo, code, discount_code_id=None):
    existing = repo.find_by_code(code)
    if existing is not None and str(existing.id) != str(discount_code_id):
        raise ValidationError({"code": ["Discount code already exists"]})


@storefront.command_handler(part_of=DiscountCode)
class ManageDiscountCodeHandler:
    @handle(CreateDiscountCode)
    def create_discount_code(self, command):
        repo = current_domain.repository_for(DiscountCode)
        _ensure_code_is_free(repo, command.code)

        discount = DiscountCode.create(
            code=command.code,
            percentage=command.percentage,
            expires_at=command.expires_at,
        )
        repo.add(discount)

        logger.info("Discount code created", code=discount.code, percentage=discount.percentage)
        return str(discount.id)

    @handle(UpdateDiscountCode)
    def update_discount_code(self, command):
        repo = current_domain.repository_for(DiscountCode)
        discount = repo.get(command.discount_code_id)
        if command.code:
            _ensure_code_is_free(repo, command.code, discount.id)

        discount.revise(
            code=command.code,
            percentage=command.percentage,
            expires_at=command.expires_at,
            is_active=command.is_active,
        )
        repo.add(discount)

    @handle(DeleteDiscountCode)
    def delete_discount_code(self, command):
        repo = current_domain.repository_for(DiscountCode)
        discount = repo.get(command.discount_code_id)
        repo._dao.delete(discount)

        logger.info("Discount code deleted", code=discount.code)
