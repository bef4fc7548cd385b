"""Thread-safe in-memory credential store, one entry per user name.

Several merchants can be registered side by side in one process; each is
keyed by its user name. Every read and write goes through a single lock
and hands out a copy, so no caller ever holds the stored instance.

See Also:
    :class:`~trustev.auth.token_cache.TokenCache` -- the companion map of
    issued tokens, guarded by its own lock.
"""

from __future__ import annotations

import threading
from typing import Optional

from trustev.models import Credential


class CredentialStore:
    """Map of user name to :class:`~trustev.models.Credential`.

    No validation happens here: empty or placeholder values are accepted
    and only rejected when a token is issued
    (:func:`~trustev.auth.issuer.check_credential`).

    Example::

        store = CredentialStore()
        store.upsert("merchant", "password", "secret", "public-key")
        credential = store.get("merchant")
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._credentials: dict[str, Credential] = {}

    def upsert(
        self,
        user_name: str,
        password: str,
        secret: str,
        public_key: str = "",
    ) -> None:
        """Insert or replace the credential registered for *user_name*.

        Replacing keeps the original registration position, so the
        fallback used by :meth:`get` is unaffected by updates.
        """
        credential = Credential(
            user_name=user_name,
            password=password,
            secret=secret,
            public_key=public_key,
        )
        with self._lock:
            self._credentials[user_name] = credential

    def get(self, user_name: str = "") -> Optional[Credential]:
        """Return a copy of the credential for *user_name*.

        When *user_name* is empty the first registered credential is
        returned. This is a single-merchant convenience: with several
        merchants registered from different threads, which one counts as
        "first" depends on registration order and is not guaranteed.

        Returns:
            An independent :class:`~trustev.models.Credential`, or ``None``
            if nothing matches.
        """
        with self._lock:
            if user_name:
                credential = self._credentials.get(user_name)
            else:
                credential = next(iter(self._credentials.values()), None)
            if credential is None:
                return None
            return credential.model_copy()

    def __len__(self) -> int:
        with self._lock:
            return len(self._credentials)
