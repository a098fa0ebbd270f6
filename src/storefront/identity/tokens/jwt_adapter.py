"""HS256 JSON Web Tokens via PyJWT."""

from datetime import UTC, datetime, timedelta

import jwt

from storefront.identity.principal import Principal, Role
from storefront.identity.tokens.port import TokenService
from storefront.shared.errors import AuthorizationError


class JwtTokenService(TokenService):
    algorithm = "HS256"

    def __init__(self, secret: str, ttl_minutes: int = 24 * 60) -> None:
        self.secret = secret
        self.ttl = timedelta(minutes=ttl_minutes)

    def issue(self, principal: Principal) -> str:
        now = datetime.now(UTC)
        payload = {**principal.claims(), "iat": now, "exp": now + self.ttl}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Principal:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthorizationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthorizationError("Invalid token")

        try:
            return Principal(
                user_id=str(payload["id"]),
                username=payload.get("username", ""),
                role=Role(payload["role"]),
            )
        except (KeyError, ValueError):
            raise AuthorizationError("Invalid token")
