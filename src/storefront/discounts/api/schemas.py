"""Pydantic request/response schemas for discount code administration."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from storefront.api.schemas import CamelModel


class CreateDiscountCodeRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"code": "SAVE20", "discount": 20, "expiresAt": "2030-12-31T23:59:59Z"}]
        }
    }

    code: str = Field(..., min_length=1, max_length=50)
    discount: float = Field(..., description="Percentage off the order subtotal")
    expires_at: datetime | None = None


class UpdateDiscountCodeRequest(CamelModel):
    code: str | None = Field(None, max_length=50)
    discount: float | None = None
    expires_at: datetime | None = None
    is_active: bool | None = None


class DiscountCodeData(CamelModel):
    id: str
    code: str
    discount: float
    expires_at: datetime | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_discount(cls, discount) -> DiscountCodeData:
        return cls(
            id=str(discount.id),
            code=discount.code,
            discount=discount.percentage,
            expires_at=discount.expires_at,
            is_active=discount.is_active,
            created_at=discount.created_at,
            updated_at=discount.updated_at,
        )
