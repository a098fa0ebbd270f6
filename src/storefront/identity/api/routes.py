"""FastAPI endpoints for authentication, the signed-in customer's account and
account administration.

``/users/me`` routes are declared before ``/users/{user_id}`` so that ``me``
is never taken for an id.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.schemas import ApiResponse, MessageResponse
from storefront.api.security import current_principal, require_admin, require_customer
from storefront.identity.api.schemas import (
    AccountSummary,
    AddressData,
    AddressRequest,
    LoginData,
    LoginRequest,
    SignupRequest,
    TokenClaims,
    UpdateAccountRequest,
    UpdateProfileRequest,
    UserProfileData,
)
from storefront.identity.authentication import load_user, login
from storefront.identity.principal import Principal
from storefront.identity.user.account import (
    DeactivateAccount,
    UpdateAccount,
    UpdateProfile,
    process_account_command,
)
from storefront.identity.user.addresses import AddAddress, RemoveAddress, UpdateAddress
from storefront.identity.user.registration import RegisterUser
from storefront.identity.user.user import User

auth_router = APIRouter(prefix="/auth", tags=["auth"])
user_router = APIRouter(prefix="/users", tags=["users"])


def _user(user_id: str) -> User:
    return current_domain.repository_for(User).get(user_id)


@auth_router.post("/signup", status_code=201, response_model=MessageResponse)
async def signup(body: SignupRequest):
    command = RegisterUser(
        username=body.username,
        email=body.email,
        password=body.password,
        full_name=body.full_name,
    )
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="User registered successfully")


@auth_router.post("/login", response_model=ApiResponse[LoginData], response_model_exclude_none=True)
async def login_user(body: LoginRequest):
    """Sign in customers and staff alike; the token carries the account's role."""
    user, token = login(body.username, body.password)
    return ApiResponse[LoginData](
        message="Login successful",
        data=LoginData(
            token=token,
            user=AccountSummary(id=str(user.id), username=user.username, email=user.email, role=user.role),
        ),
    )


@auth_router.get("/verify", response_model=ApiResponse[TokenClaims], response_model_exclude_none=True)
async def verify_token(principal: Principal = Depends(current_principal)):
    return ApiResponse[TokenClaims](data=TokenClaims(**principal.claims()))


@user_router.get("/me", response_model=ApiResponse[UserProfileData], response_model_exclude_none=True)
async def get_my_profile(principal: Principal = Depends(require_customer)):
    return ApiResponse[UserProfileData](data=UserProfileData.from_user(load_user(principal)))


@user_router.put("/me", response_model=ApiResponse[UserProfileData], response_model_exclude_none=True)
async def update_my_profile(body: UpdateProfileRequest, principal: Principal = Depends(require_customer)):
    command = UpdateProfile(
        user_id=principal.user_id,
        username=body.username,
        full_name=body.full_name,
        password=body.password,
    )
    process_account_command(command)
    return ApiResponse[UserProfileData](
        message="Profile updated", data=UserProfileData.from_user(_user(principal.user_id))
    )


@user_router.delete("/me", response_model=MessageResponse)
async def deactivate_my_account(principal: Principal = Depends(require_customer)):
    process_account_command(DeactivateAccount(user_id=principal.user_id))
    return MessageResponse(message="Account deactivated")


@user_router.get("/me/addresses", response_model=ApiResponse[list[AddressData]], response_model_exclude_none=True)
async def list_my_addresses(principal: Principal = Depends(require_customer)):
    addresses = _user(principal.user_id).addresses
    return ApiResponse[list[AddressData]](data=[AddressData.from_address(address) for address in addresses])


@user_router.post(
    "/me/addresses",
    status_code=201,
    response_model=ApiResponse[AddressData],
    response_model_exclude_none=True,
)
async def add_my_address(body: AddressRequest, principal: Principal = Depends(require_customer)):
    address = body.address
    command = AddAddress(
        user_id=principal.user_id,
        street=address.street if address else None,
        city=address.city if address else None,
        phone=body.phone,
    )
    address_id = process_account_command(command)
    return ApiResponse[AddressData](
        message="Address created successfully",
        data=AddressData.from_address(_user(principal.user_id).address(address_id)),
    )


@user_router.put(
    "/me/addresses/{address_id}",
    response_model=ApiResponse[AddressData],
    response_model_exclude_none=True,
)
async def update_my_address(address_id: str, body: AddressRequest, principal: Principal = Depends(require_customer)):
    address = body.address
    command = UpdateAddress(
        user_id=principal.user_id,
        address_id=address_id,
        street=address.street if address else None,
        city=address.city if address else None,
        phone=body.phone,
    )
    process_account_command(command)
    return ApiResponse[AddressData](
        message="Address updated successfully",
        data=AddressData.from_address(_user(principal.user_id).address(address_id)),
    )


@user_router.delete("/me/addresses/{address_id}", response_model=MessageResponse)
async def remove_my_address(address_id: str, principal: Principal = Depends(require_customer)):
    process_account_command(RemoveAddress(user_id=principal.user_id, address_id=address_id))
    return MessageResponse(message="Address deleted successfully")


@user_router.get(
    "",
    dependencies=[Depends(require_admin)],
    response_model=ApiResponse[list[UserProfileData]],
    response_model_exclude_none=True,
)
async def list_users():
    users = current_domain.repository_for(User)._dao.query.order_by("-created_at").all().items
    return ApiResponse[list[UserProfileData]](data=[UserProfileData.from_user(user) for user in users])


@user_router.get(
    "/{user_id}",
    dependencies=[Depends(require_admin)],
    response_model=ApiResponse[UserProfileData],
    response_model_exclude_none=True,
)
async def get_user(user_id: str):
    return ApiResponse[UserProfileData](data=UserProfileData.from_user(_user(user_id)))


@user_router.put(
    "/{user_id}",
    dependencies=[Depends(require_admin)],
    response_model=ApiResponse[UserProfileData],
    response_model_exclude_none=True,
)
async def update_user(user_id: str, body: UpdateAccountRequest):
    command = UpdateAccount(
        user_id=user_id,
        username=body.username,
        full_name=body.full_name,
        is_active=body.is_active,
    )
    process_account_command(command)
    return ApiResponse[UserProfileData](message="User updated", data=UserProfileData.from_user(_user(user_id)))


@user_router.delete("/{user_id}", dependencies=[Depends(require_admin)], response_model=MessageResponse)
async def deactivate_user(user_id: str):
    process_account_command(DeactivateAccount(user_id=user_id))
    return MessageResponse(message="User deactivated")
