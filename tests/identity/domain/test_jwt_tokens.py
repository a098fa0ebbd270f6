"""Tests for bearer token issue and verification."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from storefront.identity.principal import Principal, Role
from storefront.identity.tokens import get_token_service, reset_token_service, set_token_service
from storefront.identity.tokens.jwt_adapter import JwtTokenService
from storefront.shared.errors import AuthorizationError

PRINCIPAL = Principal(user_id="user-1", username="jane", role=Role.USER)


@pytest.fixture()
def service():
    return JwtTokenService(secret="unit-secret", ttl_minutes=5)


def test_round_trip_preserves_principal(service):
    assert service.verify(service.issue(PRINCIPAL)) == PRINCIPAL


def test_token_is_hs256_with_expiry(service):
    token = service.issue(PRINCIPAL)
    header = jwt.get_unverified_header(token)
    payload = jwt.decode(token, "unit-secret", algorithms=["HS256"])

    assert header["alg"] == "HS256"
    assert payload["exp"] - payload["iat"] == 5 * 60


def test_expired_token(service):
    now = datetime.now(UTC)
    token = jwt.encode(
        {**PRINCIPAL.claims(), "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
        "unit-secret",
        algorithm="HS256",
    )
    with pytest.raises(AuthorizationError) as exc:
        service.verify(token)
    assert exc.value.message == "Token has expired"
    assert exc.value.status_code == 401


def test_token_signed_with_other_secret(service):
    token = JwtTokenService(secret="other-secret").issue(PRINCIPAL)
    with pytest.raises(AuthorizationError) as exc:
        service.verify(token)
    assert exc.value.message == "Invalid token"


def test_garbage_token(service):
    with pytest.raises(AuthorizationError):
        service.verify("not-a-token")


def test_token_with_unknown_role(service):
    token = jwt.encode({"id": "user-1", "role": "wizard"}, "unit-secret", algorithm="HS256")
    with pytest.raises(AuthorizationError) as exc:
        service.verify(token)
    assert exc.value.message == "Invalid token"


class TestServiceFactory:
    def test_default_adapter_is_jwt(self):
        reset_token_service()
        assert isinstance(get_token_service(), JwtTokenService)

    def test_service_is_cached(self):
        reset_token_service()
        assert get_token_service() is get_token_service()

    def test_override(self, service):
        set_token_service(service)
        assert get_token_service() is service

    def test_unknown_adapter(self, monkeypatch):
        reset_token_service()
        monkeypatch.setenv("TOKEN_ADAPTER", "paseto")
        with pytest.raises(ValueError):
            get_token_service()
