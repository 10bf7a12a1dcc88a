"""
User directory lookup.

The password-reset flow only needs two things from the account directory:
the accounts registered under an email address, and a way to replace an
account's password. `ModelUserDirectory` answers both from the account model
through the Django ORM; the service depends on this small surface only, so a
remote directory can be swapped in through the `PASSWORD_RESET` setting.
"""

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from .exceptions import DirectoryError


@dataclass(frozen=True)
class AccountRecord:
    """Minimal view of an account returned by directory lookups."""

    id: int
    email: str


class ModelUserDirectory:
    """Directory backed by the project's `AUTH_USER_MODEL`."""

    def __init__(self, model=None):
        self.model = model

    def get_model(self):
        return self.model or get_user_model()

    def find_by_email(self, email: str) -> list[AccountRecord]:
        """
        Return the active accounts registered under `email`.

        Matching is case-insensitive. An empty list means no account exists.

        Raises:
            DirectoryError: If the database query fails.
        """

        queryset = self.get_model().objects.filter(
            email__iexact=email, is_active=True
        ).values_list("id", "email")

        try:
            return [AccountRecord(id=pk, email=address) for pk, address in queryset]
        except DatabaseError as exc:
            raise DirectoryError(str(exc)) from exc

    def set_password(self, account_id, raw_password: str) -> bool:
        """
        Replace the password of an account.

        Returns:
            bool: False when no account has `account_id`, True otherwise.

        Raises:
            DirectoryError: If the database read or write fails.
        """

        model = self.get_model()
        try:
            account = model.objects.filter(pk=account_id, is_active=True).first()
            if account is None:
                return False

            account.set_password(raw_password)
            account.save(update_fields=["password"])
        except DatabaseError as exc:
            raise DirectoryError(str(exc)) from exc

        return True
