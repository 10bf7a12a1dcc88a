"""
Email validation and masking utilities.

This module provides:
- A reusable Django `RegexValidator` (`email_shape_validator`) that checks the
  basic ``local@domain.tld`` shape accepted by the password-reset endpoint.
- A masking helper (`mask_email`) that renders an address safe to write to
  application logs.

Examples:
    >>> email_shape_validator("user@example.com")  # Valid
    >>> email_shape_validator("a@b")               # Invalid, no dot in domain
    >>> email_shape_validator("not-an-email")      # Invalid, no @

    >>> mask_email("user@example.com")
    'use***@example.com'
"""

import re

from django.core.validators import RegexValidator

from .constants import Messages

#: A Django validator for the ``local@domain.tld`` email shape.
#:
#: Rules:
#: - The local part is one or more characters that are neither whitespace nor ``@``.
#: - Exactly one ``@`` separates local part and domain.
#: - The domain contains at least one dot with non-empty labels around it,
#:   and no whitespace or ``@`` anywhere.
#: - "Whitespace" includes Unicode spaces such as NBSP and line separators.
#:
#: Raises:
#:     django.core.exceptions.ValidationError: If the input does not match the pattern.
email_shape_validator = RegexValidator(
    regex=re.compile(r"\A[^\s@]+@[^\s@]+\.[^\s@]+\Z"),
    message=Messages.INVALID_EMAIL,
    code="invalid_email",
)


def mask_email(email: str) -> str:
    """
    Mask the local part of an email address for logging.

    Keeps the first three characters of the local part and the full domain,
    so log lines stay useful for support without storing full addresses.

    Args:
        email (str): The address to mask.

    Returns:
        str: The masked address, or ``"***"`` when the value has no ``@``.

    Examples:
        >>> mask_email("user@example.com")
        'use***@example.com'
        >>> mask_email("ab@example.com")
        '***@example.com'
    """

    if not email or "@" not in email:
        return "***"

    local, _, domain = email.rpartition("@")
    visible = local[:3] if len(local) > 3 else ""
    return f"{visible}***@{domain}"
