"""Authentication headers attached by the dispatchers.

Session calls are authenticated by the merchant's public key; every other
authenticated call carries the user name and a bearer token.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from trustev.exceptions import AuthConfigurationError
from trustev.models import Credential

PUBLIC_KEY_HEADER = "X-PublicKey"
AUTHORIZATION_HEADER = "X-Authorization"


def is_session_endpoint(uri: str) -> bool:
    """Return ``True`` for URIs under ``/session`` (session and detail posts)."""
    return "/session" in urlsplit(uri).path


def public_key_headers(credential: Credential) -> dict[str, str]:
    """Headers for a session call.

    Raises:
        AuthConfigurationError: If the credential has no public key.
    """
    if not credential.public_key:
        raise AuthConfigurationError(
            f"A public key is required to post sessions for '{credential.user_name}'. "
            "Register it alongside the user name, password and secret."
        )
    return {PUBLIC_KEY_HEADER: credential.public_key}


def token_headers(user_name: str, token: str) -> dict[str, str]:
    """Headers for a token-authenticated call."""
    return {AUTHORIZATION_HEADER: f"{user_name} {token}"}
