"""
Custom account manager for handling user creation by email.

This module provides a custom `BaseUserManager` implementation (`AccountManager`)
for accounts that authenticate with an email address. It ensures that account
data is normalized and consistent during creation.

Features:
    - Accounts are always created with an email address.
    - Emails are normalized using Django's built-in utilities and lower-cased.
    - Automatically generates a UUID-based username if none is provided.
    - Superusers must have `is_staff` and `is_superuser` set.

Example:
    >>> from accounts.models import Account
    >>> account = Account.objects.create_user(
    ...     email="Test@Example.com", password="securepassword123"
    ... )
    >>> account.email
    'test@example.com'
"""

import uuid

from django.contrib.auth.models import BaseUserManager
from django.utils.translation import gettext_lazy as _


class AccountManager(BaseUserManager):
    """
    Custom manager for handling account creation with an email address.

    Methods:
        create_user(email, password=None, **extra_fields):
            Creates and saves a regular account.

        create_superuser(email, password, **extra_fields):
            Creates and saves a superuser. Enforces that `is_staff` and
            `is_superuser` are set to True.
    """

    def create_user(self, email=None, password=None, **extra_fields):
        """
        Create and return a new account with the given credentials.

        Args:
            email (str): The account's email address.
            password (str, optional): The raw password for the account.
                If None, the account will be created without a usable password.
            **extra_fields: Additional fields for the account model.

        Raises:
            ValueError: If `email` is not provided.

        Returns:
            Account: The created account instance.
        """

        if not email:
            raise ValueError(_("Email must be set"))

        email = self.normalize_email(email).strip().lower()

        if "username" not in extra_fields:
            extra_fields["username"] = str(uuid.uuid4())

        account = self.model(email=email, **extra_fields)

        if password:
            account.set_password(password)
        else:
            account.set_unusable_password()

        account.save(using=self._db)
        return account

    def create_superuser(self, email=None, password=None, **extra_fields):
        """
        Create and return a new superuser with the given credentials.

        Raises:
            ValueError:
                - If `is_staff` is not True.
                - If `is_superuser` is not True.
                - If `email` is not provided.

        Returns:
            Account: The created superuser instance.
        """

        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError(_("Superuser must have is_staff=True."))
        if extra_fields.get("is_superuser") is not True:
            raise ValueError(_("Superuser must have is_superuser=True."))

        return self.create_user(email, password, **extra_fields)
