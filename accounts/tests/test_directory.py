"""
Unit tests for `ModelUserDirectory`.
"""

import pytest
from django.db import DatabaseError

from accounts.directory import AccountRecord, ModelUserDirectory
from accounts.exceptions import DirectoryError


@pytest.mark.django_db
class TestModelUserDirectory:
    def test_find_by_email_returns_records(self, account_factory):
        account = account_factory(email="user@example.com")

        records = ModelUserDirectory().find_by_email("user@example.com")

        assert records == [AccountRecord(id=account.id, email="user@example.com")]

    def test_find_by_email_is_case_insensitive(self, account_factory):
        account_factory(email="user@example.com")

        records = ModelUserDirectory().find_by_email("User@Example.COM")

        assert len(records) == 1

    def test_find_by_email_no_match(self, account_factory):
        account_factory(email="user@example.com")

        assert ModelUserDirectory().find_by_email("ghost@example.com") == []

    def test_inactive_accounts_are_not_found(self, account_factory):
        account_factory(email="user@example.com", is_active=False)

        assert ModelUserDirectory().find_by_email("user@example.com") == []

    def test_find_by_email_database_failure(self, mocker):
        mocker.patch(
            "django.db.models.query.QuerySet._fetch_all",
            side_effect=DatabaseError("connection lost"),
        )

        with pytest.raises(DirectoryError):
            ModelUserDirectory().find_by_email("user@example.com")

    def test_set_password(self, account_factory):
        account = account_factory(email="user@example.com", password="old-password")

        assert ModelUserDirectory().set_password(account.id, "new-password-123") is True

        account.refresh_from_db()
        assert account.check_password("new-password-123")

    def test_set_password_unknown_account(self):
        assert ModelUserDirectory().set_password(999999, "new-password-123") is False
