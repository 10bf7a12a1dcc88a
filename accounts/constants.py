"""
Constants shared by the password-reset flow.

This module defines the token-store categories, the numeric limits of the
OTP flow, and the user-facing messages returned by the API. Keeping the
messages here ensures the views, the service layer, and the tests all agree
on the exact wording of the HTTP contract.

By using Django's `models.TextChoices` for categories, we get:
- Readable values stored inside each token-store entry.
- A single place to add new flows that reuse the same store.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TokenCategory(models.TextChoices):
    """
    Enumeration of the purposes a token-store entry can serve.

    The category is written into every entry so the same store can hold
    entries for several flows without their meanings colliding.

    Attributes:
        RESET_PASSWORD (str): Entry created by a password-reset request.
    """

    RESET_PASSWORD = "reset_password", "Reset Password"


#: Number of digits in an OTP code.
OTP_LENGTH = 6

#: Inclusive bounds of the OTP range (always 6 digits, no leading zero).
OTP_MIN = 100000
OTP_MAX = 999999

#: Lifetime of a pending reset request in the token store.
RESET_TTL_SECONDS = 600

#: Failed verification attempts allowed before the entry is discarded.
MAX_OTP_ATTEMPTS = 5

#: Lifetime of the signed token handed out after a successful verification.
RESET_TOKEN_MAX_AGE = 300
RESET_TOKEN_SALT = "password-reset-salt"

RESET_EMAIL_SUBJECT = "OTP for Password Reset"


class Messages:
    """User-facing strings of the password-reset API."""

    EMAIL_REQUIRED = _("Email is required")
    INVALID_EMAIL = _("Invalid email format")
    ACCOUNT_NOT_FOUND = _("Account not found. Please sign up first.")
    VERIFICATION_FAILED = _("An internal error occurred during user verification.")
    INTERNAL_ERROR = _("Internal server error")
    OTP_SENT = _("Password reset OTP sent successfully")

    TOKEN_REQUIRED = _("Token and OTP are required")
    INVALID_OTP_FORMAT = _("OTP must be a 6-digit code")
    INVALID_OTP = _("Invalid or expired OTP.")
    CODE_VERIFIED = _("Code verified. You can now set a new password.")

    RESET_TOKEN_REQUIRED = _("Reset token is required")
    PASSWORD_REQUIRED = _("Password is required")
    PASSWORD_TOO_SHORT = _("Password must be at least 8 characters long")
    PASSWORDS_DO_NOT_MATCH = _("Passwords do not match.")
    RESET_LINK_EXPIRED = _("Password reset link has expired.")
    RESET_LINK_INVALID = _("Invalid password reset link.")
    USER_NOT_FOUND = _("User not found.")
    PASSWORD_RESET_DONE = _("Password has been reset successfully.")
