"""Shared client state: credentials, tokens, and process-wide settings.

A :class:`ClientContext` is built once at startup and passed to every
:class:`~trustev.client.ApiClient` / :class:`~trustev.client.AsyncApiClient`.
All clients sharing a context share one credential store and one token
cache, so a token issued through one client is reused by the others.
"""

from __future__ import annotations

from trustev.auth.credential_store import CredentialStore
from trustev.auth.token_cache import TokenCache
from trustev.models import ClientSettings, Region, resolve_base_url


class ClientContext:
    """Owner of the credential store, token cache and client settings.

    Example::

        context = ClientContext()
        context.register("merchant-a", "pw-a", "secret-a", public_key="pk-a")
        context.register("merchant-b", "pw-b", "secret-b", base_url=Region.EU)
    """

    def __init__(self, settings: ClientSettings | None = None) -> None:
        self.credentials = CredentialStore()
        self.tokens = TokenCache()
        self._settings = settings or ClientSettings()

    @property
    def settings(self) -> ClientSettings:
        """The current settings snapshot."""
        return self._settings

    def register(
        self,
        user_name: str,
        password: str,
        secret: str,
        public_key: str = "",
        base_url: Region | str = Region.US,
        regenerate_token: bool = False,
        request_timeout_ms: int = 15000,
    ) -> None:
        """Register (or replace) a merchant's credentials.

        Earlier registrations for other user names are kept. The base URL,
        regenerate flag and timeout apply to every merchant in the context,
        so the last registration's values win.

        Args:
            user_name: The merchant's API user name.
            password: The merchant's API password.
            secret: The shared secret used to sign token requests.
            public_key: Needed only to post sessions.
            base_url: A :class:`~trustev.models.Region`, a region name, or a URL.
            regenerate_token: Issue a new token on every authenticated call.
            request_timeout_ms: Timeout applied to each HTTP exchange.
        """
        self.credentials.upsert(user_name, password, secret, public_key)
        self._settings = ClientSettings(
            base_url=resolve_base_url(base_url),
            regenerate_token=regenerate_token,
            request_timeout_ms=request_timeout_ms,
        )
