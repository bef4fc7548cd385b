"""Token issuance and the cached-token retrieval policy.

:class:`TokenIssuer` (blocking) and :class:`AsyncTokenIssuer` share the
pure helpers defined here:

- :func:`check_credential` -- rejects a missing or incomplete credential
  before any network traffic.
- :func:`build_token_request` -- signs a ``/token`` request with the
  user name and password digests.
- :func:`needs_issuance` -- decides whether the cached token can be reused.

Concurrent callers that both find a stale token for the same user name
both issue one; the later write wins in the cache. Issuance is not
coalesced.

See Also:
    :mod:`trustev.auth.digest` for the signature construction.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from trustev import endpoints
from trustev.auth.digest import digest, format_timestamp
from trustev.exceptions import AuthConfigurationError, TrustevError
from trustev.models import CachedToken, Credential, TokenRequest

if TYPE_CHECKING:
    from trustev.client.async_dispatcher import AsyncDispatcher
    from trustev.client.dispatcher import Dispatcher
    from trustev.context import ClientContext

logger = logging.getLogger(__name__)


def require_credential(credential: Optional[Credential], user_name: str = "") -> Credential:
    """Return *credential*, or raise if nothing is registered for *user_name*."""
    if credential is None:
        who = f"'{user_name}'" if user_name else "any user"
        raise AuthConfigurationError(
            f"No credentials registered for {who}. Register a user name, "
            "password and secret before calling the API."
        )
    return credential


def check_credential(credential: Optional[Credential], user_name: str = "") -> Credential:
    """Return *credential* if it can sign a token request.

    Raises:
        AuthConfigurationError: If *credential* is ``None`` or its user
            name, password or secret is empty.
    """
    credential = require_credential(credential, user_name)
    if not credential.user_name or not credential.password or not credential.secret:
        raise AuthConfigurationError(
            f"Credentials for '{credential.user_name}' are incomplete: a user name, "
            "password and secret are all required to request a token."
        )
    return credential


def build_token_request(credential: Credential, now: Optional[datetime] = None) -> TokenRequest:
    """Sign a token request for *credential* at *now* (default: current UTC time)."""
    timestamp = format_timestamp(now or datetime.now(timezone.utc))
    return TokenRequest(
        user_name=credential.user_name,
        password_hash=digest(credential.secret, credential.password, timestamp),
        user_name_hash=digest(credential.secret, credential.user_name, timestamp),
        timestamp=timestamp,
    )


def needs_issuance(
    cached: Optional[CachedToken],
    regenerate: bool,
    now: Optional[datetime] = None,
) -> bool:
    """Return ``True`` when a new token must be issued instead of reusing *cached*."""
    if regenerate or cached is None:
        return True
    return cached.is_expired(now)


def _require_token(token: Optional[CachedToken], user_name: str) -> CachedToken:
    if token is None or not token.api_token:
        raise TrustevError(f"Token endpoint returned no token for '{user_name}'")
    return token


class TokenIssuer:
    """Issues tokens through a :class:`~trustev.client.dispatcher.Dispatcher`.

    Args:
        context: Shared credential store, token cache and settings.
        dispatcher: Used for the unauthenticated ``POST /token`` exchange.
    """

    def __init__(self, context: ClientContext, dispatcher: Dispatcher) -> None:
        self._context = context
        self._dispatcher = dispatcher

    def issue(self, user_name: str = "") -> str:
        """Request a fresh token for *user_name* and cache it.

        Returns:
            The new token string.

        Raises:
            AuthConfigurationError: If the credential is missing or incomplete.
            HttpError: If the token endpoint rejects the request.
        """
        credential = check_credential(self._context.credentials.get(user_name), user_name)
        settings = self._context.settings
        request = build_token_request(credential)
        logger.debug("Requesting token for %s", credential.user_name)
        token = self._dispatcher.call(
            endpoints.token_uri(settings.base_url),
            "POST",
            request,
            CachedToken,
            needs_auth=False,
            timeout_ms=settings.request_timeout_ms,
            user_name=credential.user_name,
        )
        token = _require_token(token, credential.user_name)
        self._context.tokens.put(credential.user_name, token)
        logger.debug("Token for %s expires at %s", credential.user_name, token.expire_at)
        return token.api_token

    def get_valid_token(self, user_name: str = "") -> str:
        """Return a usable token, issuing one if the cached token is stale.

        With ``regenerate_token`` set on the context, a token is issued on
        every call and the cache is never consulted.
        """
        credential = check_credential(self._context.credentials.get(user_name), user_name)
        key = credential.user_name
        if self._context.settings.regenerate_token:
            return self.issue(key)
        cached = self._context.tokens.get(key)
        if needs_issuance(cached, regenerate=False):
            return self.issue(key)
        assert cached is not None
        return cached.api_token


class AsyncTokenIssuer:
    """Non-blocking counterpart of :class:`TokenIssuer`."""

    def __init__(self, context: ClientContext, dispatcher: AsyncDispatcher) -> None:
        self._context = context
        self._dispatcher = dispatcher

    async def issue(self, user_name: str = "") -> str:
        """Request a fresh token for *user_name* and cache it."""
        credential = check_credential(self._context.credentials.get(user_name), user_name)
        settings = self._context.settings
        request = build_token_request(credential)
        logger.debug("Requesting token for %s", credential.user_name)
        token = await self._dispatcher.call(
            endpoints.token_uri(settings.base_url),
            "POST",
            request,
            CachedToken,
            needs_auth=False,
            timeout_ms=settings.request_timeout_ms,
            user_name=credential.user_name,
        )
        token = _require_token(token, credential.user_name)
        self._context.tokens.put(credential.user_name, token)
        return token.api_token

    async def get_valid_token(self, user_name: str = "") -> str:
        """Return a usable token, issuing one if the cached token is stale."""
        credential = check_credential(self._context.credentials.get(user_name), user_name)
        key = credential.user_name
        if self._context.settings.regenerate_token:
            return await self.issue(key)
        cached = self._context.tokens.get(key)
        if needs_issuance(cached, regenerate=False):
            return await self.issue(key)
        assert cached is not None
        return cached.api_token
