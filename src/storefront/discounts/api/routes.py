"""FastAPI endpoints for discount code administration. All require an admin."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.schemas import ApiResponse, MessageResponse
from storefront.api.security import require_admin
from storefront.discounts.api.schemas import (
    CreateDiscountCodeRequest,
    DiscountCodeData,
    UpdateDiscountCodeRequest,
)
from storefront.discounts.discount_code import DiscountCode
from storefront.discounts.management import CreateDiscountCode, DeleteDiscountCode, UpdateDiscountCode

router = APIRouter(prefix="/discount-codes", tags=["discount-codes"], dependencies=[Depends(require_admin)])


def _discount_data(discount_code_id: str) -> DiscountCodeData:
    return DiscountCodeData.from_discount(current_domain.repository_for(DiscountCode).get(discount_code_id))


@router.get("", response_model=ApiResponse[list[DiscountCodeData]], response_model_exclude_none=True)
async def list_discount_codes():
    codes = current_domain.repository_for(DiscountCode)._dao.query.order_by("-created_at").all().items
    return ApiResponse[list[DiscountCodeData]](data=[DiscountCodeData.from_discount(code) for code in codes])


@router.post("", status_code=201, response_model=ApiResponse[DiscountCodeData], response_model_exclude_none=True)
async def create_discount_code(body: CreateDiscountCodeRequest):
    command = CreateDiscountCode(code=body.code, percentage=body.discount, expires_at=body.expires_at)
    discount_code_id = current_domain.process(command, asynchronous=False)
    return ApiResponse[DiscountCodeData](data=_discount_data(discount_code_id))


@router.get("/{discount_code_id}", response_model=ApiResponse[DiscountCodeData], response_model_exclude_none=True)
async def get_discount_code(discount_code_id: str):
    return ApiResponse[DiscountCodeData](data=_discount_data(discount_code_id))


@router.put("/{discount_code_id}", response_model=ApiResponse[DiscountCodeData], response_model_exclude_none=True)
async def update_discount_code(discount_code_id: str, body: UpdateDiscountCodeRequest):
    command = UpdateDiscountCode(
        discount_code_id=discount_code_id,
        code=body.code,
        percentage=body.discount,
        expires_at=body.expires_at,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return ApiResponse[DiscountCodeData](data=_discount_data(discount_code_id))


@router.delete("/{discount_code_id}", response_model=MessageResponse)
async def delete_discount_code(discount_code_id: str):
    current_domain.process(DeleteDiscountCode(discount_code_id=discount_code_id), asynchronous=False)
    return MessageResponse(message="Discount code deleted")
