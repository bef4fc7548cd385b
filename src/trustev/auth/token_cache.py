"""Thread-safe in-memory cache of issued API tokens, one per user name."""

from __future__ import annotations

import threading
from typing import Optional

from trustev.models import CachedToken


class TokenCache:
    """Map of user name to :class:`~trustev.models.CachedToken`.

    Entries are never swept: staleness is checked lazily by the token
    issuer when a token is requested. A new token for the same user name
    replaces the old one (last write wins).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[str, CachedToken] = {}

    def get(self, user_name: str) -> Optional[CachedToken]:
        """Return a copy of the cached token for *user_name*, or ``None``."""
        with self._lock:
            token = self._tokens.get(user_name)
            return token.model_copy() if token is not None else None

    def put(self, user_name: str, token: CachedToken) -> None:
        """Insert or replace the token cached for *user_name*."""
        stored = token.model_copy()
        with self._lock:
            self._tokens[user_name] = stored
