"""Pydantic models for credentials, tokens, and configuration.

Wire entities for API resources live in :mod:`trustev.entities`; this
module holds the shapes the library itself owns. They fall into two groups:

**Auth models** -- held by :class:`~trustev.auth.CredentialStore` and
:class:`~trustev.auth.TokenCache`, or exchanged with the ``/token``
endpoint: :class:`Credential`, :class:`CachedToken`, :class:`TokenRequest`.

**Configuration models** -- process-wide client settings and the CLI's
persisted JSON: :class:`Region`, :class:`ClientSettings`,
:class:`OutputConfig`, :class:`GlobalConfig`, and :class:`Profile`.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Auth models ---


class Credential(BaseModel):
    """One registered credential set, keyed by ``user_name``.

    The store hands out copies only, so mutating an instance obtained from
    :meth:`~trustev.auth.CredentialStore.get` never affects other readers.
    """

    user_name: str
    password: str = Field(repr=False)
    secret: str = Field(repr=False)
    public_key: str = Field(default="", description="Only used to post sessions")


class CachedToken(BaseModel):
    """An issued API token and its absolute UTC expiry.

    Decoded straight from the ``/token`` response body
    (``{APIToken, ExpireAt, CredentialType}``).
    """

    model_config = ConfigDict(populate_by_name=True)

    api_token: str = Field(default="", alias="APIToken")
    expire_at: Optional[datetime] = Field(default=None, alias="ExpireAt")
    credential_type: int = Field(default=0, alias="CredentialType")

    @field_validator("expire_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # The service may send naive timestamps; they are UTC.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Return ``True`` if the token is empty, has no expiry, or ``expire_at <= now``."""
        if not self.api_token or self.expire_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        return self.expire_at <= now


class TokenRequest(BaseModel):
    """Body posted to ``{base_url}/token``."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(alias="UserName")
    password_hash: str = Field(alias="PasswordHash")
    user_name_hash: str = Field(alias="UserNameHash")
    timestamp: str = Field(alias="TimeStamp")


# --- Configuration models ---


class Region(str, enum.Enum):
    """Built-in API regions and their base URLs."""

    US = "us"
    EU = "eu"

    @property
    def base_url(self) -> str:
        return _REGION_URLS[self]


_REGION_URLS = {
    Region.US: "https://app.trustev.com/api/v2.0",
    Region.EU: "https://app-eu.trustev.com/api/v2.0",
}


def resolve_base_url(region_or_url: Region | str) -> str:
    """Turn a :class:`Region`, a region name, or an explicit URL into a base URL.

    Args:
        region_or_url: ``Region.US``, ``"eu"``, or ``"https://..."``.

    Returns:
        The base URL without a trailing slash.
    """
    if isinstance(region_or_url, Region):
        return region_or_url.base_url
    try:
        return Region(region_or_url.lower()).base_url
    except ValueError:
        return region_or_url.rstrip("/")


class ClientSettings(BaseModel):
    """Process-wide settings shared by every tenant of a context."""

    base_url: str = Field(default=Region.US.base_url)
    regenerate_token: bool = Field(
        default=False, description="Issue a fresh token on every authenticated call"
    )
    request_timeout_ms: int = Field(default=15000, description="Per-call timeout in milliseconds")

    @property
    def timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000.0


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/trustev/config.json``.

    See :func:`~trustev.config.resolve_config` for how it combines with the
    ``--profile`` flag and the ``TRUSTEV_PROFILE`` environment variable.
    """

    default_profile: Optional[str] = None
    auto_select_single_profile: bool = True
    output: OutputConfig = Field(default_factory=OutputConfig)


class Profile(BaseModel):
    """Per-merchant profile stored as JSON under the ``profiles/`` config directory.

    Secrets are never stored here: ``password_source`` and
    ``secret_source`` are descriptors resolved at use time by
    :func:`~trustev.config.resolve_credential` (``env:VAR``,
    ``file:/path`` or ``prompt``).
    """

    name: str
    user_name: str
    password_source: str = Field(default="prompt")
    secret_source: str = Field(default="prompt")
    public_key: str = ""
    region: Region = Region.US
    base_url: Optional[str] = Field(
        default=None, description="Overrides the region's base URL"
    )
    regenerate_token: bool = False
    request_timeout_ms: int = 15000

    @property
    def effective_base_url(self) -> str:
        return resolve_base_url(self.base_url or self.region)
