"""Token service port (abstract interface).

Issues and verifies the bearer tokens that carry a caller's identity and
role. Route guards and the login flow only talk to this interface.
"""

from abc import ABC, abstractmethod

from storefront.identity.principal import Principal


class TokenService(ABC):
    @abstractmethod
    def issue(self, principal: Principal) -> str:
        """Return a signed token for ``principal``."""
        ...

    @abstractmethod
    def verify(self, token: str) -> Principal:
        """Decode ``token``.

        Raises:
            AuthorizationError: the token is malformed, tampered with or expired.
        """
        ...
