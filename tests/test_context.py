"""Tests for trustev.context and the configuration-side models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from trustev.context import ClientContext
from trustev.exceptions import AuthConfigurationError, HttpError, TrustevError
from trustev.exit_codes import EXIT_AUTH_CONFIGURATION, EXIT_HTTP_ERROR
from trustev.models import CachedToken, ClientSettings, Profile, Region, resolve_base_url


class TestClientContext:
    def test_defaults(self) -> None:
        context = ClientContext()
        assert context.settings.base_url == "https://app.trustev.com/api/v2.0"
        assert context.settings.request_timeout_ms == 15000
        assert context.settings.regenerate_token is False
        assert len(context.credentials) == 0

    def test_register_stores_credentials_and_settings(self) -> None:
        context = ClientContext()
        context.register(
            "merchant", "pw", "s", public_key="pk", base_url=Region.EU,
            regenerate_token=True, request_timeout_ms=3000,
        )
        assert context.credentials.get("merchant").public_key == "pk"
        assert context.settings == ClientSettings(
            base_url="https://app-eu.trustev.com/api/v2.0",
            regenerate_token=True,
            request_timeout_ms=3000,
        )

    def test_multiple_merchants_last_settings_win(self) -> None:
        context = ClientContext()
        context.register("alice", "pw", "s", base_url="us", request_timeout_ms=1000)
        context.register("bob", "pw", "s", base_url="https://proxy.test/api/", request_timeout_ms=2000)
        assert len(context.credentials) == 2
        assert context.credentials.get().user_name == "alice"
        assert context.settings.base_url == "https://proxy.test/api"
        assert context.settings.timeout_seconds == 2.0

    def test_contexts_are_independent(self) -> None:
        first, second = ClientContext(), ClientContext()
        first.register("merchant", "pw", "s")
        assert second.credentials.get("merchant") is None


class TestModels:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (Region.US, "https://app.trustev.com/api/v2.0"),
            ("EU", "https://app-eu.trustev.com/api/v2.0"),
            ("https://example.test/v2/", "https://example.test/v2"),
        ],
    )
    def test_resolve_base_url(self, value, expected: str) -> None:
        assert resolve_base_url(value) == expected

    def test_cached_token_naive_expiry_is_utc(self) -> None:
        token = CachedToken.model_validate(
            {"APIToken": "t", "ExpireAt": "2030-01-01T00:00:00", "CredentialType": 1}
        )
        assert token.expire_at.tzinfo is not None
        assert token.expire_at == datetime(2030, 1, 1, tzinfo=timezone.utc)

    def test_cached_token_expiry(self) -> None:
        now = datetime.now(timezone.utc)
        assert not CachedToken(api_token="t", expire_at=now + timedelta(minutes=1)).is_expired(now)
        assert CachedToken(api_token="t", expire_at=now).is_expired(now)
        assert CachedToken(api_token="t").is_expired(now)

    def test_credential_repr_hides_secrets(self) -> None:
        context = ClientContext()
        context.register("merchant", "hunter2", "topsecret")
        text = repr(context.credentials.get("merchant"))
        assert "hunter2" not in text
        assert "topsecret" not in text

    def test_profile_effective_base_url(self) -> None:
        assert Profile(name="p", user_name="u", region=Region.EU).effective_base_url == (
            "https://app-eu.trustev.com/api/v2.0"
        )
        assert Profile(name="p", user_name="u", base_url="https://x.test").effective_base_url == (
            "https://x.test"
        )


class TestExceptions:
    def test_http_error_keeps_status_and_body(self) -> None:
        error = HttpError(418, "I'm a teapot")
        assert error.status_code == 418
        assert error.body == "I'm a teapot"
        assert str(error) == "HTTP 418: I'm a teapot"
        assert error.exit_code == EXIT_HTTP_ERROR

    def test_http_error_without_body(self) -> None:
        assert str(HttpError(500, "")) == "HTTP 500"

    def test_exit_code_override(self) -> None:
        assert TrustevError("x", exit_code=9).exit_code == 9
        assert AuthConfigurationError("x").exit_code == EXIT_AUTH_CONFIGURATION
