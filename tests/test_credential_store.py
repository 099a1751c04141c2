"""Tests for the credential store."""

import pytest

from blog_fact_checker.storage.credential_store import (
    COLLECTION_ENV,
    TOKEN_ENV,
    CredentialStore,
    WebflowCredentials,
)


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.delenv(TOKEN_ENV, raising=False)
    monkeypatch.delenv(COLLECTION_ENV, raising=False)
    return CredentialStore(db_path=tmp_path / "creds" / "credentials.db")


class TestCredentialStore:
    def test_empty_store(self, store):
        creds = store.get()
        assert creds == WebflowCredentials()
        assert not creds.complete

    def test_save_and_get(self, store):
        store.save("token-abcdef123456", "coll-1")
        creds = store.get()
        assert creds.api_token == "token-abcdef123456"
        assert creds.collection_id == "coll-1"
        assert creds.complete

    def test_save_overwrites(self, store):
        store.save("old-token", "old-coll")
        store.save("new-token", "new-coll")
        assert store.get().api_token == "new-token"

    def test_save_strips_whitespace(self, store):
        store.save("  tok  ", " coll\n")
        assert store.get() == WebflowCredentials("tok", "coll")

    def test_save_rejects_blank(self, store):
        with pytest.raises(ValueError, match="non-empty"):
            store.save("", "coll")

    def test_env_fallback(self, store, monkeypatch):
        monkeypatch.setenv(TOKEN_ENV, "env-token")
        monkeypatch.setenv(COLLECTION_ENV, "env-coll")
        assert store.get() == WebflowCredentials("env-token", "env-coll")

    def test_stored_values_win_over_env(self, store, monkeypatch):
        monkeypatch.setenv(TOKEN_ENV, "env-token")
        store.save("stored-token", "stored-coll")
        assert store.get().api_token == "stored-token"

    def test_clear(self, store):
        store.save("tok", "coll")
        assert store.clear() == 2
        assert store.get() == WebflowCredentials()

    def test_persists_across_instances(self, store):
        store.save("tok", "coll")
        again = CredentialStore(db_path=store.db_path)
        assert again.get().collection_id == "coll"


class TestWebflowCredentials:
    def test_masked_token(self):
        assert WebflowCredentials("abcd1234wxyz", "c").masked_token == "abcd...wxyz"
        assert WebflowCredentials("short", "c").masked_token == "****"
        assert WebflowCredentials().masked_token == "(not set)"
