"""Account maintenance: profile edits, admin updates and deactivation.

Placement records discount redemptions on the same User record, so every
command here runs through ``process_account_command`` while holding that
customer's lock.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.passwords import hash_password
from storefront.identity.user.user import User
from storefront.shared.locks import customer_key, hold_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class UpdateProfile:
    """A signed-in user editing their own account."""

    user_id: Identifier(required=True)
    username: String(max_length=50)
    full_name: String(max_length=150)
    password: String(max_length=128)


@storefront.command(part_of="User")
class UpdateAccount:
    """An administrator editing any account, including switching it on or off."""

    user_id: Identifier(required=True)
    username: String(max_length=50)
    full_name: String(max_length=150)
    is_active: Boolean()


@storefront.command(part_of="User")
class DeactivateAccount:
    user_id: Identifier(required=True)


def process_account_command(command):
    """Run a command that rewrites ``command.user_id``'s record while holding its lock."""
    with hold_locks([customer_key(command.user_id)]):
        return current_domain.process(command, asynchronous=False)


def _ensure_username_is_free(repo, username, user_id):
    existing = repo.find_by_username(username)
    if existing is not None and str(existing.id) != str(user_id):
        raise ValidationError({"username": ["Username already exists"]})


@storefront.command_handler(part_of=User)
class ManageAccountHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        if command.username:
            _ensure_username_is_free(repo, command.username, user.id)

        user.update_profile(
            username=command.username,
            full_name=command.full_name,
            password_hash=hash_password(command.password) if command.password else None,
        )
        repo.add(user)
        logger.info("Profile updated", user_id=str(user.id), password_changed=bool(command.password))

    @handle(UpdateAccount)
    def update_account(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        if command.username:
            _ensure_username_is_free(repo, command.username, user.id)

        user.update_profile(username=command.username, full_name=command.full_name)
        if command.is_active is True:
            user.reactivate()
        elif command.is_active is False:
            user.deactivate()
        repo.add(user)
        logger.info("Account updated", user_id=str(user.id), is_active=user.is_active)

    @handle(DeactivateAccount)
    def deactivate_account(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deactivate()
        repo.add(user)
        logger.info("Account deactivated", user_id=str(user.id))
