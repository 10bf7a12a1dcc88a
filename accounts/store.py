"""
Ephemeral token store built on the Django cache framework.

Pending password-reset requests live only here. Each entry is stored under a
fresh random token (UUID4) with a fixed expiry and holds a JSON document::

    {"category": "reset_password", "email": "user@example.com", "otp": "123456"}

The cache backend is whatever `CACHES["default"]` points at: Redis through
``django-redis`` in deployed environments, the local-memory cache in
development and tests. Set-with-expiry is a single atomic cache operation,
and every request owns a unique key, so no cross-key coordination is needed.
"""

import json
import logging
import uuid

from django.core.cache import cache

from .constants import RESET_TTL_SECONDS
from .exceptions import TokenStoreError

logger = logging.getLogger(__name__)


class ResetTokenStore:
    """
    Key-value store for pending reset requests.

    Keys:
        - ``<token>``: the JSON entry itself.
        - ``<token>:attempts``: failed verification attempts for the entry.

    Both keys expire after `ttl` seconds.
    """

    def __init__(self, backend=None, ttl: int = RESET_TTL_SECONDS):
        self.backend = backend if backend is not None else cache
        self.ttl = ttl

    @staticmethod
    def _attempts_key(token: str) -> str:
        return f"{token}:attempts"

    def save(self, category: str, email: str, otp: str) -> str:
        """
        Store a new entry under a freshly generated token.

        Args:
            category (str): Purpose tag of the entry (e.g. "reset_password").
            email (str): Address the OTP was issued for.
            otp (str): The OTP the user has to echo back.

        Raises:
            TokenStoreError: If the cache backend fails.

        Returns:
            str: The token the entry is stored under.
        """

        token = str(uuid.uuid4())
        value = json.dumps({"category": str(category), "email": email, "otp": otp})

        try:
            self.backend.set(token, value, timeout=self.ttl)
        except Exception as exc:
            raise TokenStoreError(f"could not store reset entry: {exc}") from exc

        return token

    def get(self, token: str):
        """
        Fetch the entry stored under `token`.

        Returns:
            dict | None: The decoded entry, or None when absent or expired.
        """

        try:
            value = self.backend.get(token)
        except Exception as exc:
            raise TokenStoreError(f"could not read reset entry: {exc}") from exc

        if value is None:
            return None

        try:
            entry = json.loads(value)
        except (TypeError, ValueError):
            entry = None

        if not isinstance(entry, dict):
            logger.warning("Discarding malformed token store entry")
            return None
        return entry

    def delete(self, token: str) -> None:
        try:
            self.backend.delete_many([token, self._attempts_key(token)])
        except Exception as exc:
            raise TokenStoreError(f"could not delete reset entry: {exc}") from exc

    def register_failed_attempt(self, token: str) -> int:
        """
        Increment and return the failed-attempt counter of an entry.

        The counter is created on first use with the same lifetime as the
        entry, so it never outlives it by more than one TTL.
        """

        key = self._attempts_key(token)
        try:
            self.backend.add(key, 0, timeout=self.ttl)
            return self.backend.incr(key)
        except ValueError:
            # counter expired between add() and incr()
            self.backend.set(key, 1, timeout=self.ttl)
            return 1
        except Exception as exc:
            raise TokenStoreError(f"could not update attempts: {exc}") from exc
