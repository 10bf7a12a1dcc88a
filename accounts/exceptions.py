"""
Error taxonomy of the password-reset flow.

Two families of exceptions live here:

- Collaborator errors (`DirectoryError`, `EmailDeliveryError`,
  `TokenStoreError`) raised by the infrastructure adapters when the
  underlying database, mail transport, or cache fails.
- Flow errors (`PasswordResetError` subclasses) raised by the service layer.
  Each one carries the HTTP status code and the public message the view
  returns as ``{"error": message}``. Internal details stay in the exception
  chain and the logs; they are never part of `message`.
"""

from rest_framework import status
from rest_framework.views import exception_handler

from .constants import Messages


class DirectoryError(Exception):
    """Raised when the account directory cannot be queried."""


class EmailDeliveryError(Exception):
    """Raised when the email transport rejects or fails to send a message."""


class TokenStoreError(Exception):
    """Raised when the token store cannot be read or written."""


class PasswordResetError(Exception):
    """Base class for failures of the password-reset flow."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = Messages.INTERNAL_ERROR
    internal_detail = None

    def __init__(self, message=None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.internal_detail or str(self.message))


class InvalidInput(PasswordResetError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = Messages.INVALID_EMAIL


class AccountNotFound(PasswordResetError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = Messages.ACCOUNT_NOT_FOUND


class DirectoryUnavailable(PasswordResetError):
    default_message = Messages.VERIFICATION_FAILED


class OTPDeliveryFailed(PasswordResetError):
    """
    Raised when the OTP email could not be sent or the entry not stored.

    The public message stays generic; the stage that failed is logged and
    kept as the exception's ``__cause__``.
    """

    internal_detail = "Failed to send OTP"


class ResetStoreUnavailable(PasswordResetError):
    """Raised when a pending reset request cannot be read or discarded."""

    internal_detail = "Token store unavailable"


class InvalidResetCode(PasswordResetError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = Messages.INVALID_OTP


class InvalidResetToken(PasswordResetError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = Messages.RESET_LINK_INVALID


def api_exception_handler(exc, context):
    """
    DRF exception handler rendering framework errors as ``{"error": ...}``.

    Covers errors raised by DRF itself before a view runs (malformed JSON,
    throttling, unsupported methods) so every response of the API shares the
    same error shape.
    """

    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and "detail" in data:
        response.data = {"error": str(data["detail"])}
    return response
