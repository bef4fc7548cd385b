"""Credential and token management for trustev.

- :class:`CredentialStore` -- thread-safe credentials keyed by user name.
- :class:`TokenCache` -- thread-safe issued tokens keyed by user name.
- :func:`digest` -- the secret-bound signature used by ``/token``.
- :class:`TokenIssuer` / :class:`AsyncTokenIssuer` -- issue tokens and
  decide when a cached one can be reused.

Typical usage goes through :class:`~trustev.context.ClientContext`, which
owns one store and one cache and is shared by every client.
"""

from trustev.auth.credential_store import CredentialStore
from trustev.auth.digest import digest, format_timestamp
from trustev.auth.issuer import AsyncTokenIssuer, TokenIssuer
from trustev.auth.token_cache import TokenCache

__all__ = [
    "AsyncTokenIssuer",
    "CredentialStore",
    "TokenCache",
    "TokenIssuer",
    "digest",
    "format_timestamp",
]
