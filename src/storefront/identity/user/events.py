"""Domain events for the User aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A customer signed up."""

    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class DiscountCodeRedeemed:
    """A customer spent a single-use discount code on an order."""

    __version__ = 1

    user_id: Identifier(required=True)
    code: String(required=True)
    order_id: Identifier()
    redeemed_at: DateTime(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    full_name: String()
    password_changed: Boolean(default=False)


@storefront.event(part_of="User")
class AccountDeactivated:
    """The account can no longer sign in or use its tokens."""

    __version__ = 1

    user_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@storefront.event(part_of="User")
class AccountReactivated:
    __version__ = 1

    user_id: Identifier(required=True)
    reactivated_at: DateTime(required=True)


@storefront.event(part_of="User")
class AddressAdded:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    street: String(required=True)
    city: String(required=True)
    phone: String()


@storefront.event(part_of="User")
class AddressUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    street: String()
    city: String()
    phone: String()


@storefront.event(part_of="User")
class AddressRemoved:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
