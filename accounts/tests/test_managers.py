"""
Unit tests for `AccountManager`.

This module verifies that the custom manager methods for creating accounts
and superusers behave correctly.

It also ensures:
    - Proper normalization of email addresses.
    - Default values for flags (`is_staff`, `is_superuser`).
    - Validation errors are raised when the email is missing.
"""

import pytest

from accounts.models import Account


@pytest.mark.django_db
class TestAccountManager:
    def test_create_user_with_email(self):
        """
        Ensures:
            - Email is set correctly.
            - Username is auto-generated.
            - Password is hashed correctly.
        """

        account = Account.objects.create_user(email="test@example.com", password="pw1")

        assert account.email == "test@example.com"
        assert account.username is not None
        assert account.check_password("pw1")
        assert account.is_staff is False
        assert account.is_superuser is False

    def test_create_user_normalizes_email(self):
        account = Account.objects.create_user(email="  Mixed.Case@Example.COM ")

        assert account.email == "mixed.case@example.com"

    def test_create_user_without_password(self):
        account = Account.objects.create_user(email="nopass@example.com")

        assert account.has_usable_password() is False

    def test_create_user_without_email(self):
        with pytest.raises(ValueError):
            Account.objects.create_user(email=None, password="pw1")

    def test_create_superuser(self):
        admin = Account.objects.create_superuser(
            email="admin@example.com", password="adminpass"
        )

        assert admin.is_staff is True
        assert admin.is_superuser is True
        assert admin.is_active is True

    @pytest.mark.parametrize("flag", ["is_staff", "is_superuser"])
    def test_create_superuser_requires_flags(self, flag):
        with pytest.raises(ValueError):
            Account.objects.create_superuser(
                email="admin@example.com", password="adminpass", **{flag: False}
            )
