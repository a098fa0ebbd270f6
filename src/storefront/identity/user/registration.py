"""Customer signup: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.passwords import hash_password
from storefront.identity.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a customer account. Staff accounts are only created by seeding."""

    username: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    full_name: String(max_length=150)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.exists_with(command.username, command.email):
            raise ValidationError({"username": ["username or email already exists"]})

        user = User.register(
            username=command.username,
            email=command.email,
            password_hash=hash_password(command.password),
            full_name=command.full_name,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), username=user.username)
        return str(user.id)
