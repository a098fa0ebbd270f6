"""Bearer-token guards, composed into routes as FastAPI dependencies.

    @router.get("/admin", dependencies=[Depends(require_admin)])
    async def admin_only(): ...

    async def mine(principal: Principal = Depends(require_customer)): ...
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.identity.authentication import load_user
from storefront.identity.principal import ADMIN_ROLES, Principal, Role
from storefront.identity.tokens import get_token_service
from storefront.shared.errors import AuthorizationError

bearer_scheme = HTTPBearer(auto_error=False)


async def optional_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal | None:
    """The caller, when a bearer token is sent. A bad token is still an error."""
    if credentials is None:
        return None
    return get_token_service().verify(credentials.credentials)


async def current_principal(principal: Principal | None = Depends(optional_principal)) -> Principal:
    """The caller, whose account must still exist and be active."""
    if principal is None:
        raise AuthorizationError("No token provided")
    load_user(principal)
    return principal


def require_role(*roles: Role):
    async def guard(principal: Principal = Depends(current_principal)) -> Principal:
        if principal.role not in roles:
            raise AuthorizationError.forbidden()
        return principal

    return guard


require_admin = require_role(*ADMIN_ROLES)
require_customer = require_role(Role.USER)
