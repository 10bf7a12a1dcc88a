"""
Unit tests for `ResetTokenStore`.

The store is exercised against the real local-memory cache configured for
tests, and against mocked cache backends for failure paths and for checking
the exact timeout passed to the backend.
"""

import json
import time
import uuid

import pytest

from accounts.constants import RESET_TTL_SECONDS, TokenCategory
from accounts.exceptions import TokenStoreError
from accounts.store import ResetTokenStore


class TestResetTokenStore:
    def test_save_returns_uuid_token_and_stores_entry(self):
        store = ResetTokenStore()

        token = store.save(TokenCategory.RESET_PASSWORD, "user@example.com", "123456")

        assert str(uuid.UUID(token)) == token
        assert store.get(token) == {
            "category": "reset_password",
            "email": "user@example.com",
            "otp": "123456",
        }

    def test_save_uses_fixed_ttl(self, mocker):
        backend = mocker.Mock()
        store = ResetTokenStore(backend=backend)

        token = store.save("reset_password", "user@example.com", "123456")

        backend.set.assert_called_once_with(
            token,
            json.dumps(
                {"category": "reset_password", "email": "user@example.com", "otp": "123456"}
            ),
            timeout=RESET_TTL_SECONDS,
        )
        assert RESET_TTL_SECONDS == 600

    def test_tokens_are_unique(self):
        store = ResetTokenStore()

        tokens = {store.save("reset_password", "user@example.com", "123456") for _ in range(20)}

        assert len(tokens) == 20

    def test_get_missing_token_returns_none(self):
        assert ResetTokenStore().get("missing") is None

    def test_expired_entry_is_absent(self, mocker):
        store = ResetTokenStore()
        token = store.save("reset_password", "user@example.com", "123456")

        # Jump past the expiry of the local-memory cache entry
        later = time.time() + RESET_TTL_SECONDS + 1
        mocker.patch("django.core.cache.backends.locmem.time.time", return_value=later)

        assert store.get(token) is None

    def test_delete_removes_entry_and_attempts(self):
        store = ResetTokenStore()
        token = store.save("reset_password", "user@example.com", "123456")
        store.register_failed_attempt(token)

        store.delete(token)

        assert store.get(token) is None
        assert store.register_failed_attempt(token) == 1

    def test_register_failed_attempt_counts(self):
        store = ResetTokenStore()
        token = store.save("reset_password", "user@example.com", "123456")

        assert store.register_failed_attempt(token) == 1
        assert store.register_failed_attempt(token) == 2
        assert store.register_failed_attempt(token) == 3

    @pytest.mark.parametrize(
        "raw", ["not json", "[1, 2, 3]", "\"reset_password\"", "42", "null"]
    )
    def test_malformed_entry_is_ignored(self, mocker, raw):
        backend = mocker.Mock()
        backend.get.return_value = raw
        store = ResetTokenStore(backend=backend)

        assert store.get("token") is None

    def test_backend_failure_on_save_raises_store_error(self, mocker):
        backend = mocker.Mock()
        backend.set.side_effect = ConnectionError("redis down")
        store = ResetTokenStore(backend=backend)

        with pytest.raises(TokenStoreError):
            store.save("reset_password", "user@example.com", "123456")

    def test_backend_failure_on_get_raises_store_error(self, mocker):
        backend = mocker.Mock()
        backend.get.side_effect = ConnectionError("redis down")
        store = ResetTokenStore(backend=backend)

        with pytest.raises(TokenStoreError):
            store.get("token")
