"""Synchronous HTTP dispatcher with per-merchant authentication.

:class:`Dispatcher` is the single code path through which every API call
is made. For each call it:

1. **Authenticates** -- session calls get the merchant's public key in
   ``X-PublicKey``; every other authenticated call gets
   ``X-Authorization: <user name> <token>``, with the token issued or
   reused by :class:`~trustev.auth.issuer.TokenIssuer`. The ``/token``
   call itself is sent without either header.
2. **Encodes** the body with :func:`trustev.codec.encode` (GET sends none).
3. **Sends** one request over TLS 1.2 or newer, with the caller's timeout.
   There is no retry.
4. **Decodes** a 2xx body into the requested shape, or raises
   :class:`~trustev.exceptions.HttpError` carrying the status code and the
   body text exactly as received.

See Also:
    :class:`~trustev.client.async_dispatcher.AsyncDispatcher` for the
    non-blocking equivalent.
"""

from __future__ import annotations

import ssl
from typing import Any, Optional

import httpx

from trustev import codec
from trustev.auth.headers import is_session_endpoint, public_key_headers, token_headers
from trustev.auth.issuer import TokenIssuer, require_credential
from trustev.context import ClientContext
from trustev.exceptions import HttpError, TransportError
from trustev.output import get_output


def tls_context() -> ssl.SSLContext:
    """Default-verified SSL context that refuses anything older than TLS 1.2."""
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


def timeout_seconds(timeout_ms: Optional[int], context: ClientContext) -> float:
    if timeout_ms is None:
        return context.settings.timeout_seconds
    return timeout_ms / 1000.0


def raise_for_status(response: httpx.Response) -> None:
    """Raise :class:`HttpError` for any non-2xx response, body verbatim."""
    if not response.is_success:
        raise HttpError(response.status_code, response.text)


class Dispatcher:
    """Blocking dispatcher backed by :class:`httpx.Client`.

    Can be used as a context manager; otherwise call :meth:`close` when
    done.

    Args:
        context: Shared credentials, tokens and settings.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        with Dispatcher(context) as dispatcher:
            case = dispatcher.call(uri, "GET", None, Case, user_name="merchant")
    """

    def __init__(
        self,
        context: ClientContext,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._context = context
        self._client = httpx.Client(verify=tls_context(), transport=transport)
        self._issuer = TokenIssuer(context, self)

    @property
    def issuer(self) -> TokenIssuer:
        return self._issuer

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def call(
        self,
        uri: str,
        method: str,
        body: Any = None,
        response_type: Any = None,
        *,
        needs_auth: bool = True,
        timeout_ms: Optional[int] = None,
        user_name: str = "",
    ) -> Any:
        """Send one request and decode the response.

        Args:
            uri: Fully formatted request URL.
            method: HTTP method (GET, POST, PUT, ...).
            body: Entity, list, dict or pre-encoded JSON string. Ignored for GET.
            response_type: Shape to decode the response into, e.g.
                ``Case`` or ``list[CaseStatus]``.
            needs_auth: ``False`` only for the ``/token`` call.
            timeout_ms: Overrides the context's request timeout.
            user_name: Merchant to authenticate as; empty means the first
                registered merchant.

        Returns:
            The decoded response, or ``None`` for an empty body.

        Raises:
            AuthConfigurationError: Before any network traffic, if the
                credentials cannot authenticate this call.
            HttpError: On any non-2xx status.
            TransportError: On timeouts and connection failures.
        """
        method = method.upper()

        # 1. Authentication headers
        headers: dict[str, str] = {"Accept": "application/json"}
        if needs_auth:
            headers.update(self._auth_headers(uri, user_name))

        # 2. Body
        content: Optional[str] = None
        if method != "GET":
            content = codec.encode(body)
            headers["Content-Type"] = "application/json; charset=utf-8"

        # 3. Send
        get_output().debug(f"{method} {uri}")
        response = self._send(method, uri, headers, content, timeout_ms)
        get_output().debug(f"HTTP {response.status_code} {method} {uri}")

        # 4. Decode or fail
        raise_for_status(response)
        return codec.decode(response.text, response_type)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _auth_headers(self, uri: str, user_name: str) -> dict[str, str]:
        credential = require_credential(self._context.credentials.get(user_name), user_name)
        if is_session_endpoint(uri):
            return public_key_headers(credential)
        token = self._issuer.get_valid_token(credential.user_name)
        return token_headers(credential.user_name, token)

    def _send(
        self,
        method: str,
        uri: str,
        headers: dict[str, str],
        content: Optional[str],
        timeout_ms: Optional[int],
    ) -> httpx.Response:
        kwargs: dict[str, Any] = {
            "method": method,
            "url": uri,
            "headers": headers,
            "timeout": timeout_seconds(timeout_ms, self._context),
        }
        if content is not None:
            kwargs["content"] = content.encode("utf-8")
        try:
            return self._client.request(**kwargs)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {uri} failed: {exc}") from exc
