"""Tests for trustev.auth.credential_store and trustev.auth.token_cache."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from trustev.auth.credential_store import CredentialStore
from trustev.auth.token_cache import TokenCache
from trustev.models import CachedToken


class TestCredentialStore:
    def test_get_returns_registered_values(self) -> None:
        store = CredentialStore()
        store.upsert("alice", "pw", "secret", "pk")
        credential = store.get("alice")
        assert credential is not None
        assert credential.user_name == "alice"
        assert credential.password == "pw"
        assert credential.secret == "secret"
        assert credential.public_key == "pk"

    def test_unknown_user_returns_none(self) -> None:
        store = CredentialStore()
        store.upsert("alice", "pw", "secret")
        assert store.get("bob") is None

    def test_empty_store_returns_none(self) -> None:
        assert CredentialStore().get() is None
        assert CredentialStore().get("alice") is None

    def test_empty_user_name_falls_back_to_first_registered(self) -> None:
        store = CredentialStore()
        store.upsert("alice", "pw-a", "s-a")
        store.upsert("bob", "pw-b", "s-b")
        credential = store.get("")
        assert credential is not None
        assert credential.user_name == "alice"

    def test_upsert_replaces_existing_entry(self) -> None:
        store = CredentialStore()
        store.upsert("alice", "old", "s")
        store.upsert("alice", "new", "s")
        assert len(store) == 1
        assert store.get("alice").password == "new"

    def test_replacing_keeps_registration_order(self) -> None:
        store = CredentialStore()
        store.upsert("alice", "pw", "s")
        store.upsert("bob", "pw", "s")
        store.upsert("alice", "pw2", "s")
        assert len(store) == 2
        assert store.get().user_name == "alice"
        assert store.get().password == "pw2"

    def test_mutating_a_returned_copy_does_not_affect_the_store(self) -> None:
        store = CredentialStore()
        store.upsert("alice", "pw", "secret")
        copy = store.get("alice")
        copy.password = "tampered"
        assert store.get("alice").password == "pw"

    def test_empty_values_are_accepted(self) -> None:
        store = CredentialStore()
        store.upsert("alice", "", "")
        assert store.get("alice").password == ""

    def test_concurrent_upserts_keep_every_user(self) -> None:
        store = CredentialStore()

        def _register(i: int) -> None:
            store.upsert(f"user-{i}", "pw", "s")

        threads = [threading.Thread(target=_register, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(store) == 20


class TestTokenCache:
    def _token(self, value: str = "tok") -> CachedToken:
        return CachedToken(
            api_token=value,
            expire_at=datetime.now(timezone.utc) + timedelta(hours=1),
            credential_type=1,
        )

    def test_get_missing_returns_none(self) -> None:
        assert TokenCache().get("alice") is None

    def test_put_then_get(self) -> None:
        cache = TokenCache()
        cache.put("alice", self._token("a"))
        assert cache.get("alice").api_token == "a"

    def test_last_write_wins(self) -> None:
        cache = TokenCache()
        cache.put("alice", self._token("first"))
        cache.put("alice", self._token("second"))
        assert cache.get("alice").api_token == "second"

    def test_entries_are_per_user(self) -> None:
        cache = TokenCache()
        cache.put("alice", self._token("a"))
        cache.put("bob", self._token("b"))
        assert cache.get("alice").api_token == "a"
        assert cache.get("bob").api_token == "b"

    def test_stored_token_is_isolated_from_caller(self) -> None:
        cache = TokenCache()
        token = self._token("a")
        cache.put("alice", token)
        token.api_token = "changed"
        cache.get("alice").api_token = "changed-again"
        assert cache.get("alice").api_token == "a"
