"""
Account model backing the user directory.

This module defines a Django `AbstractUser` subclass (`Account`) that replaces
the default username-based authentication system. Accounts are identified by
their **email** address, which is also the address password-reset codes are
sent to.

Features:
    - Unique UUID-based username (non-editable, hidden from the user).
    - Authentication via `email` (`USERNAME_FIELD`).
    - Automatic normalization of `email` (lowercase, trimmed).
    - Custom manager (`AccountManager`) for account creation.

Example:
    >>> from accounts.models import Account
    >>> account = Account.objects.create_user(
    ...     email="Test@Example.com", password="securepassword123"
    ... )
    >>> account.email
    'test@example.com'
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.translation import gettext_lazy as _

from .managers import AccountManager


class Account(AbstractUser):
    """
    Account model with email as the unique identifier.

    Attributes:
        username (str): Auto-generated UUID-based identifier (hidden from end users).
        email (str): Account's unique email address (primary identifier).
        USERNAME_FIELD (str): Set to "email" for authentication.
        REQUIRED_FIELDS (list): Empty, since email is the only required field.
    """

    username = models.CharField(
        max_length=150,
        unique=True,
        default=uuid.uuid4,
        editable=False,
        verbose_name=_("username"),
    )
    email = models.EmailField(max_length=254, unique=True, verbose_name=_("email"))

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = AccountManager()

    class Meta:
        verbose_name = _("account")
        verbose_name_plural = _("accounts")

    def save(self, *args, **kwargs):
        """Lower-case and trim the email before saving."""

        if self.email:
            self.email = self.email.strip().lower()

        super().save(*args, **kwargs)

    def __str__(self):
        return self.email or str(self.id)
