"""Shared test fixtures for trustev.

Provides isolated config environments, output state management, a
registered :class:`~trustev.context.ClientContext`, and a fake Trustev
service built on :class:`httpx.MockTransport`.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import httpx
import pytest

from trustev.context import ClientContext
from trustev.output import OutputFormat, OutputManager, reset_output, set_output

BASE_URL = "https://trustev.test/api/v2.0"
BASE_PATH = "/api/v2.0"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams the
    cached references go stale, so a fresh manager is created on next use.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain-format output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Forces the XDG layout, points ``XDG_CONFIG_HOME`` into *tmp_path* and
    clears ``TRUSTEV_*`` variables so tests never touch real user config.
    """
    monkeypatch.setattr("trustev.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("TRUSTEV_PROFILE", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Client context
# ---------------------------------------------------------------------------


@pytest.fixture
def context() -> ClientContext:
    """A context with one fully registered merchant against the fake service."""
    ctx = ClientContext()
    ctx.register("merchant", "pw", "shh", public_key="pk-1", base_url=BASE_URL)
    return ctx


# ---------------------------------------------------------------------------
# Fake Trustev service
# ---------------------------------------------------------------------------


class FakeTrustev:
    """Records requests and answers ``/token`` plus any registered routes.

    Routes are keyed by ``(method, path)``; each value is either a
    ``(status, body)`` tuple or a callable returning an
    :class:`httpx.Response`.
    """

    def __init__(self, token_lifetime: timedelta = timedelta(hours=1)) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Any] = {}
        self.token_lifetime = token_lifetime
        self.tokens_issued = 0

    def route(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/token")]

    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if not r.url.path.endswith("/token")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/token") and ("POST", request.url.path) not in self.routes:
            self.tokens_issued += 1
            expire_at = datetime.now(timezone.utc) + self.token_lifetime
            return httpx.Response(
                200,
                json={
                    "APIToken": f"tok-{self.tokens_issued}",
                    "ExpireAt": expire_at.isoformat(),
                    "CredentialType": 1,
                },
            )

        entry = self.routes.get((request.method, request.url.path))
        if entry is None:
            return httpx.Response(404, text="no route")
        if callable(entry):
            return entry(request)
        status, body = entry
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @staticmethod
    def json_body(request: httpx.Request) -> Any:
        """Decode a recorded request's JSON body, or ``None`` if it has none."""
        if not request.content:
            return None
        return json.loads(request.content.decode("utf-8"))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def async_transport(self) -> httpx.MockTransport:
        async def _handler(request: httpx.Request) -> httpx.Response:
            await request.aread()
            return self.handler(request)

        return httpx.MockTransport(_handler)


@pytest.fixture
def fake() -> FakeTrustev:
    return FakeTrustev()
