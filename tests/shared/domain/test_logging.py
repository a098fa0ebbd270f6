"""Tests for request-scoped logging context."""

import structlog

from storefront.utils.logging import add_context, clear_context, current_env, get_log_level


def test_context_is_bound_and_cleared():
    add_context(request_id="req-1", path="/orders")
    assert structlog.contextvars.get_contextvars() == {"request_id": "req-1", "path": "/orders"}

    clear_context()
    assert structlog.contextvars.get_contextvars() == {}


def test_log_level_follows_environment(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "production")

    assert current_env() == "production"
    assert get_log_level() == "INFO"


def test_explicit_log_level_wins(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert get_log_level() == "ERROR"
