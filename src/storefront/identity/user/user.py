"""User aggregate root, saved Address entity and repository.

Every account that can sign in is a User: customers (role ``user``) and
staff (``admin``, ``super-admin``). Customers additionally remember which
discount codes they have redeemed, since each code is single-use per
customer, and may keep a short list of delivery addresses.

Accounts are never removed, only deactivated. A deactivated account cannot
sign in, and tokens issued before deactivation stop being accepted.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, String, Text

from storefront.domain import storefront
from storefront.identity.principal import Principal, Role
from storefront.identity.user.events import (
    AccountDeactivated,
    AccountReactivated,
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    DiscountCodeRedeemed,
    ProfileUpdated,
    UserRegistered,
)
from storefront.shared.errors import AlreadyUsedError, NotFoundError

MAX_ADDRESSES = 10


@storefront.entity(part_of="User")
class Address:
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    phone: String(max_length=30, default="")


@storefront.aggregate
class User:
    username: String(required=True, max_length=50, unique=True)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=100)
    full_name: String(max_length=150)
    role: String(choices=Role, default=Role.USER.value)
    used_discount_codes: Text(default="[]")  # JSON: list of redeemed codes
    addresses: HasMany(Address)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses or []) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @classmethod
    def register(cls, username, email, password_hash, full_name=None, role=Role.USER):
        now = datetime.now()
        user = cls(
            username=username.strip(),
            email=email.strip().lower(),
            password_hash=password_hash,
            full_name=full_name,
            role=role.value,
            created_at=now,
        )
        if role == Role.USER:
            user.raise_(
                UserRegistered(
                    user_id=user.id,
                    username=user.username,
                    email=user.email,
                    registered_at=now,
                )
            )
        return user

    @property
    def principal(self) -> Principal:
        return Principal(user_id=str(self.id), username=self.username, role=Role(self.role))

    def redeemed_codes(self) -> list[str]:
        return json.loads(self.used_discount_codes) if self.used_discount_codes else []

    def has_used(self, code: str) -> bool:
        return code in self.redeemed_codes()

    def record_discount_use(self, code: str, order_id: str | None = None) -> None:
        if self.has_used(code):
            raise AlreadyUsedError("Discount code already used by this user")

        self.used_discount_codes = json.dumps(self.redeemed_codes() + [code])
        self.raise_(
            DiscountCodeRedeemed(
                user_id=self.id,
                code=code,
                order_id=order_id,
                redeemed_at=datetime.now(UTC),
            )
        )

    def update_profile(self, username=None, full_name=None, password_hash=None):
        """Change whichever of username, full name and password is given."""
        if username:
            self.username = username.strip()
        if full_name:
            self.full_name = full_name.strip()
        if password_hash:
            self.password_hash = password_hash

        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                username=self.username,
                full_name=self.full_name,
                password_changed=bool(password_hash),
            )
        )

    def deactivate(self):
        if not self.is_active:
            return
        self.is_active = False
        self.raise_(AccountDeactivated(user_id=self.id, deactivated_at=datetime.now(UTC)))

    def reactivate(self):
        if self.is_active:
            return
        self.is_active = True
        self.raise_(AccountReactivated(user_id=self.id, reactivated_at=datetime.now(UTC)))

    def address(self, address_id) -> Address:
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise NotFoundError("Address not found")
        return address

    def add_address(self, street, city, phone=None) -> Address:
        street, city = (street or "").strip(), (city or "").strip()
        if not street or not city:
            raise ValidationError({"address": ["Address street and city are required"]})

        address = Address(street=street, city=city, phone=(phone or "").strip())
        self.add_addresses(address)
        self.raise_(
            AddressAdded(
                user_id=self.id,
                address_id=address.id,
                street=street,
                city=city,
                phone=address.phone,
            )
        )
        return address

    def update_address(self, address_id, street=None, city=None, phone=None) -> Address:
        """Change the given parts of a saved address. Blank street or city is rejected."""
        address = self.address(address_id)
        if any(value is not None and not value.strip() for value in (street, city)):
            raise ValidationError({"address": ["Address street and city are required"]})

        if street is not None:
            address.street = street.strip()
        if city is not None:
            address.city = city.strip()
        if phone is not None:
            address.phone = phone.strip()

        self.raise_(
            AddressUpdated(
                user_id=self.id,
                address_id=address.id,
                street=street,
                city=city,
                phone=phone,
            )
        )
        return address

    def remove_address(self, address_id) -> None:
        address = self.address(address_id)
        self.remove_addresses(address)
        self.raise_(AddressRemoved(user_id=self.id, address_id=address.id))


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_login(self, login: str) -> User | None:
        """Look up an active account by username or email."""
        login = login.strip()
        by_username = self._dao.query.filter(username=login, is_active=True).all().first
        if by_username is not None:
            return by_username
        return self._dao.query.filter(email=login.lower(), is_active=True).all().first

    def find_by_username(self, username: str) -> User | None:
        return self._dao.query.filter(username=username.strip()).all().first

    def exists_with(self, username: str, email: str) -> bool:
        if self._dao.query.filter(username=username.strip()).all().total:
            return True
        return bool(self._dao.query.filter(email=email.strip().lower()).all().total)
