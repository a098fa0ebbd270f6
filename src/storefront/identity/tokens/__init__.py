"""Token service factory.

Provides get_token_service() / set_token_service() to swap implementations.
The adapter is chosen by the TOKEN_ADAPTER environment variable; ``jwt``
(the default) signs with JWT_SECRET and expires after JWT_TTL_MINUTES.
"""

import os

from storefront.identity.tokens.port import TokenService

DEFAULT_SECRET = "your-secret-key"

_current_service: TokenService | None = None


def get_token_service() -> TokenService:
    global _current_service
    if _current_service is None:
        adapter = os.environ.get("TOKEN_ADAPTER", "jwt")
        if adapter == "jwt":
            from storefront.identity.tokens.jwt_adapter import JwtTokenService

            _current_service = JwtTokenService(
                secret=os.environ.get("JWT_SECRET", DEFAULT_SECRET),
                ttl_minutes=int(os.environ.get("JWT_TTL_MINUTES", "1440")),
            )
        else:
            raise ValueError(f"Unknown token adapter: {adapter}")
    return _current_service


def set_token_service(service: TokenService) -> None:
    """Override the active token service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_token_service() -> None:
    global _current_service
    _current_service = None
