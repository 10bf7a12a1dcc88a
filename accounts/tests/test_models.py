"""
Unit tests for the `Account` model.

This module verifies:
    - Account creation with email and password.
    - Normalization of email on save.
    - String representation of the account instance.
    - Uniqueness constraint on email.
    - Registration of the model in the admin site.

Tools:
    - `pytest` for test structure and assertions.
    - `pytest.mark.django_db` to allow database access for tests.
    - `IntegrityError` to test uniqueness constraints.
"""

import pytest
from django.contrib import admin
from django.core.management import call_command
from django.db.utils import IntegrityError

from accounts.models import Account


@pytest.mark.django_db
class TestAccountModel:
    """
    Test suite for `Account` model.
    """

    def test_account_creation(self):
        """
        Test that an account can be created with email and password,
        and that default flags (`is_staff`, `is_superuser`) are False.
        """

        account = Account.objects.create_user(
            email="test@example.com", password="password123"
        )

        assert account.email == "test@example.com"
        assert account.check_password("password123")

        # Default staff and superuser flags
        assert account.is_staff is False
        assert account.is_superuser is False

        assert Account.objects.count() == 1

    def test_normalization_on_save(self):
        """
        Email should be lowercased and trimmed, also when saved directly.
        """

        account = Account.objects.create(email="  TestCapital@EXAMPLE.COM  ")

        account.refresh_from_db()
        assert account.email == "testcapital@example.com"

    def test_str_representation(self):
        account = Account.objects.create(email="email@test.com")

        assert str(account) == "email@test.com"

    def test_email_uniqueness(self):
        """
        Creating two accounts with the same email raises an IntegrityError,
        regardless of the case it was given in.
        """

        Account.objects.create_user(email="unique@example.com", password="p1")

        with pytest.raises(IntegrityError):
            Account.objects.create_user(email="UNIQUE@example.com", password="p2")

    def test_usernames_are_generated_and_unique(self):
        first = Account.objects.create_user(email="first@example.com")
        second = Account.objects.create_user(email="second@example.com")

        assert first.username
        assert first.username != second.username

    def test_registered_in_admin(self):
        assert admin.site.is_registered(Account)


@pytest.mark.django_db
def test_migrations_match_model():
    """The shipped migration declares exactly the fields of `Account`."""

    call_command("makemigrations", "accounts", "--check", "--dry-run", verbosity=0)
