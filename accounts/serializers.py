"""
Serializers for the password-reset flow.

This module provides the Django REST Framework serializers that validate
the three steps of the flow:
    - Password reset request (email shape)
    - OTP verification (token + 6-digit code)
    - Setting the new password (signed reset token + matching passwords)

Error messages are declared per field so the API can answer with a single
``{"error": "..."}`` body; `first_error` extracts that message from DRF's
error dictionary.

Example:
    >>> serializer = PasswordResetRequestSerializer(data={"email": "user@example.com"})
    >>> serializer.is_valid()
    True
    >>> serializer.validated_data
    {'email': 'user@example.com'}
"""

from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers

from .constants import OTP_LENGTH, Messages
from .utils import email_shape_validator


def first_error(errors):
    """
    Return the first error message found in a DRF error structure.

    Args:
        errors (dict | list | str): `serializer.errors` or a nested part of it.

    Returns:
        str: The first message, depth-first, in field declaration order.

    Example:
        >>> first_error({"email": ["Email is required"]})
        'Email is required'
    """

    if isinstance(errors, dict):
        for value in errors.values():
            message = first_error(value)
            if message:
                return message
        return ""

    if isinstance(errors, (list, tuple)):
        for value in errors:
            message = first_error(value)
            if message:
                return message
        return ""

    return str(errors)


def _required(message):
    return {"required": message, "blank": message, "null": message}


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Password Reset Request - JSON",
            value={"email": "user@example.com"},
            description="Sends a 6-digit OTP to the address if an account exists.",
        ),
    ],
)
class PasswordResetRequestSerializer(serializers.Serializer):
    """
    Serializer for requesting a password reset OTP.

    **Input Format**: JSON: `{"email": "user@domain.com"}`

    **Validation Flow**:
    1. Email must be present and non-empty.
    2. Email must have the `local@domain.tld` shape.

    Account existence is checked by the service, not here.
    """

    email = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        validators=[email_shape_validator],
        error_messages={
            **_required(Messages.EMAIL_REQUIRED),
            "invalid": Messages.INVALID_EMAIL,
        },
    )


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Password Reset Verify - JSON",
            value={"token": "0b6c7a3e-4f1d-4d2b-9a57-1e2f3c4d5e6f", "otp": "123456"},
            description="Token from the request step plus the code received by email.",
        ),
    ],
)
class PasswordResetVerifySerializer(serializers.Serializer):
    """
    Serializer for verifying a password reset OTP.

    **Input Format**: JSON: `{"token": "...", "otp": "123456"}`

    **Validation Flow**:
    1. Both fields present.
    2. OTP is exactly 6 digits.
    """

    token = serializers.CharField(
        write_only=True, error_messages=_required(Messages.TOKEN_REQUIRED)
    )
    otp = serializers.CharField(
        write_only=True, error_messages=_required(Messages.TOKEN_REQUIRED)
    )

    def validate_otp(self, value):
        value = value.strip()
        if len(value) != OTP_LENGTH or not value.isdigit():
            raise serializers.ValidationError(Messages.INVALID_OTP_FORMAT)
        return value


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Set New Password - JSON",
            value={
                "password": "NewStrongPass123!",
                "password_confirm": "NewStrongPass123!",
                "reset_token": "42:1tXyZa:signature",
            },
            description="Passwords must match; token from the verify step.",
        ),
    ],
)
class PasswordResetSetPasswordSerializer(serializers.Serializer):
    """
    Serializer for setting a new password after a reset.

    **Input Format**: JSON: `{"password": "...", "password_confirm": "...", "reset_token": "..."}`

    **Validation Flow**:
    1. Ensure passwords match (min 8 chars).
    2. The reset token itself is checked by the service.
    """

    reset_token = serializers.CharField(
        write_only=True, error_messages=_required(Messages.RESET_TOKEN_REQUIRED)
    )
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        trim_whitespace=False,
        error_messages={
            **_required(Messages.PASSWORD_REQUIRED),
            "min_length": Messages.PASSWORD_TOO_SHORT,
        },
    )
    password_confirm = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        error_messages=_required(Messages.PASSWORD_REQUIRED),
    )

    def validate(self, attrs):
        """Ensure both passwords match."""

        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError(
                {"password_confirm": Messages.PASSWORDS_DO_NOT_MATCH}
            )

        return attrs
