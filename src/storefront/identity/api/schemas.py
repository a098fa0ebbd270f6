"""Pydantic request/response schemas for signup, login and profiles."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from storefront.api.schemas import CamelModel


class SignupRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"username": "jane", "email": "jane@example.com", "password": "s3cret-pass"}]
        }
    }

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)
    full_name: str | None = Field(None, max_length=150)


class LoginRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"username": "admin", "password": "admin123"}]}}

    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)


class AccountSummary(CamelModel):
    id: str
    username: str
    email: str
    role: str


class LoginData(CamelModel):
    token: str
    user: AccountSummary


class TokenClaims(CamelModel):
    id: str
    username: str
    role: str


class StreetAddress(CamelModel):
    street: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)


class AddressRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"phone": "+15550100", "address": {"street": "1 Main St", "city": "Springfield"}}]
        }
    }

    phone: str | None = Field(None, max_length=30)
    address: StreetAddress | None = None


class AddressData(CamelModel):
    id: str
    phone: str = ""
    address: StreetAddress

    @classmethod
    def from_address(cls, address) -> AddressData:
        return cls(
            id=str(address.id),
            phone=address.phone or "",
            address=StreetAddress(street=address.street, city=address.city),
        )


class UpdateProfileRequest(CamelModel):
    username: str | None = Field(None, min_length=1, max_length=50)
    full_name: str | None = Field(None, max_length=150)
    password: str | None = Field(None, min_length=1, max_length=128)


class UpdateAccountRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"fullName": "Jane Doe", "isActive": False}]}}

    username: str | None = Field(None, min_length=1, max_length=50)
    full_name: str | None = Field(None, max_length=150)
    is_active: bool | None = None


class UserProfileData(CamelModel):
    id: str
    username: str
    email: str
    full_name: str | None = None
    role: str
    is_active: bool
    used_discount_codes: list[str] = Field(default_factory=list)
    addresses: list[AddressData] = Field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> UserProfileData:
        return cls(
            id=str(user.id),
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            is_active=user.is_active,
            used_discount_codes=user.redeemed_codes(),
            addresses=[AddressData.from_address(address) for address in user.addresses],
            created_at=user.created_at,
        )
