"""Asynchronous HTTP dispatcher -- mirrors :class:`~trustev.client.dispatcher.Dispatcher`.

:class:`AsyncDispatcher` wraps :class:`httpx.AsyncClient` and applies the
same authentication, encoding and error rules as the blocking dispatcher.
Credential and token lookups never await; only the network exchange does.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from trustev import codec
from trustev.auth.headers import is_session_endpoint, public_key_headers, token_headers
from trustev.auth.issuer import AsyncTokenIssuer, require_credential
from trustev.client.dispatcher import raise_for_status, timeout_seconds, tls_context
from trustev.context import ClientContext
from trustev.exceptions import TransportError
from trustev.output import get_output


class AsyncDispatcher:
    """Non-blocking dispatcher backed by :class:`httpx.AsyncClient`.

    Args:
        context: Shared credentials, tokens and settings.
        transport: Optional async :mod:`httpx` transport.

    Example::

        async with AsyncDispatcher(context) as dispatcher:
            case = await dispatcher.call(uri, "GET", None, Case)
    """

    def __init__(
        self,
        context: ClientContext,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._context = context
        self._client = httpx.AsyncClient(verify=tls_context(), transport=transport)
        self._issuer = AsyncTokenIssuer(context, self)

    @property
    def issuer(self) -> AsyncTokenIssuer:
        return self._issuer

    async def __aenter__(self) -> AsyncDispatcher:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def call(
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

        See :meth:`trustev.client.dispatcher.Dispatcher.call` for the
        arguments and the errors raised.
        """
        method = method.upper()

        headers: dict[str, str] = {"Accept": "application/json"}
        if needs_auth:
            headers.update(await self._auth_headers(uri, user_name))

        content: Optional[str] = None
        if method != "GET":
            content = codec.encode(body)
            headers["Content-Type"] = "application/json; charset=utf-8"

        get_output().debug(f"{method} {uri}")
        kwargs: dict[str, Any] = {
            "method": method,
            "url": uri,
            "headers": headers,
            "timeout": timeout_seconds(timeout_ms, self._context),
        }
        if content is not None:
            kwargs["content"] = content.encode("utf-8")
        try:
            response = await self._client.request(**kwargs)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {uri} failed: {exc}") from exc
        get_output().debug(f"HTTP {response.status_code} {method} {uri}")

        raise_for_status(response)
        return codec.decode(response.text, response_type)

    async def _auth_headers(self, uri: str, user_name: str) -> dict[str, str]:
        credential = require_credential(self._context.credentials.get(user_name), user_name)
        if is_session_endpoint(uri):
            return public_key_headers(credential)
        token = await self._issuer.get_valid_token(credential.user_name)
        return token_headers(credential.user_name, token)
