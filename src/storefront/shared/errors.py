"""Business errors raised by the storefront domain.

Field-level and input validation failures use protean's ``ValidationError``
directly; everything here is a rule violation with its own HTTP mapping.
"""


class StorefrontError(Exception):
    """Base class for business-rule violations surfaced to API clients."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    status_code = 404

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class InsufficientStockError(StorefrontError):
    def __init__(self, product_id: str, product_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}, Requested: {requested}"
        )
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested


class InvalidStateError(StorefrontError):
    """An object exists but is not in a state that allows the operation."""


class AlreadyUsedError(StorefrontError):
    """A single-use resource (a discount code) was presented a second time."""


class AuthorizationError(StorefrontError):
    """Missing, invalid or expired credentials (401) or insufficient role (403)."""

    status_code = 401

    def __init__(self, message: str = "Authentication required", status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code

    @classmethod
    def forbidden(cls, message: str = "Access denied"):
        return cls(message, status_code=403)


class PersistenceError(StorefrontError):
    status_code = 500

    def __init__(self, message: str = "The store could not complete the operation"):
        super().__init__(message)
