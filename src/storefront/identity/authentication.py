"""Credential checks and resolution of token holders to user records."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.principal import Principal
from storefront.identity.tokens import get_token_service
from storefront.identity.user.passwords import check_password
from storefront.identity.user.user import User
from storefront.shared.errors import AuthorizationError

logger = structlog.get_logger(__name__)


def login(username: str, password: str) -> tuple[User, str]:
    """Check credentials and issue a token.

    ``username`` may also be the account's email. Unknown accounts and wrong
    passwords produce the same error.
    """
    user = current_domain.repository_for(User).find_by_login(username)
    if user is None or not check_password(password, user.password_hash):
        logger.info("Login rejected", login=username)
        raise AuthorizationError("Invalid credentials")

    token = get_token_service().issue(user.principal)
    logger.info("Login succeeded", user_id=str(user.id), role=user.role)
    return user, token


def load_user(principal: Principal) -> User:
    """Fetch the account behind a verified token.

    A token whose account no longer exists (or was deactivated) is treated as
    invalid credentials.
    """
    try:
        user = current_domain.repository_for(User).get(principal.user_id)
    except ObjectNotFoundError:
        raise AuthorizationError("User not found")
    if not user.is_active:
        raise AuthorizationError("User account is inactive")
    return user
