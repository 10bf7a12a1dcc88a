"""
OTP generation and the password-reset service.

This module holds the business logic of the password-reset flow. The view
layer only parses requests and renders responses; everything in between
happens here.

Flow:
    1. `issue_otp`: look the email up in the directory, generate a 6-digit
       OTP, email it, and store ``{category, email, otp}`` under a fresh
       random token for 10 minutes. The token is returned only after both the
       email and the store write succeeded.
    2. `verify_otp`: match the OTP echoed by the user against the entry
       stored under the token. The entry is single-use and discarded after
       `MAX_OTP_ATTEMPTS` failed attempts. A short-lived signed reset token is
       returned on success.
    3. `set_password`: unsign the reset token and replace the password.

Collaborators (directory, mailer, store) are injected, and one instance is
built at startup by `AccountsConfig.ready()` from the `PASSWORD_RESET`
setting (see `build_password_reset_service`).

Example:
    >>> service = PasswordResetService(ModelUserDirectory(), OTPMailer(), ResetTokenStore())
    >>> issued = service.issue_otp("user@example.com")
    >>> issued.token
    'b3c1f6e2-5d0a-4b8e-9f1a-2c7d8e9f0a1b'
"""

import hmac
import logging
import secrets
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.signing import BadSignature, SignatureExpired, TimestampSigner
from django.utils.module_loading import import_string

from .constants import (
    MAX_OTP_ATTEMPTS,
    OTP_MAX,
    OTP_MIN,
    RESET_TOKEN_MAX_AGE,
    RESET_TOKEN_SALT,
    Messages,
    TokenCategory,
)
from .exceptions import (
    AccountNotFound,
    DirectoryError,
    DirectoryUnavailable,
    EmailDeliveryError,
    InvalidInput,
    InvalidResetCode,
    InvalidResetToken,
    OTPDeliveryFailed,
    ResetStoreUnavailable,
    TokenStoreError,
)
from .utils import email_shape_validator, mask_email

logger = logging.getLogger(__name__)


class OTPService:
    """Generation of one-time password codes."""

    @staticmethod
    def generate_code() -> str:
        """
        Generate a 6-digit numeric OTP code.

        Uses Python's `secrets` module so codes are unpredictable. The value is
        drawn uniformly from [100000, 999999], so it never has a leading zero.

        Returns:
            str: A randomly generated 6-digit code.

        Example:
            >>> OTPService.generate_code()
            '493027'
        """

        return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


@dataclass(frozen=True)
class IssuedReset:
    """Result of a successful password-reset request."""

    token: str
    otp: str


class PasswordResetService:
    """
    Orchestrates the password-reset flow over its three collaborators.

    Args:
        directory: Object with ``find_by_email(email)`` and
            ``set_password(account_id, raw_password)``.
        mailer: Object with ``send_reset_otp(to, otp)``.
        store: Object with ``save``, ``get``, ``delete`` and
            ``register_failed_attempt``.
    """

    category = TokenCategory.RESET_PASSWORD

    def __init__(self, directory, mailer, store):
        self.directory = directory
        self.mailer = mailer
        self.store = store

    def _signer(self):
        return TimestampSigner(salt=RESET_TOKEN_SALT)

    def _find_accounts(self, email):
        try:
            return self.directory.find_by_email(email)
        except DirectoryError as exc:
            logger.error(
                "Directory lookup failed for %s: %s", mask_email(email), exc
            )
            raise DirectoryUnavailable() from exc

    def issue_otp(self, email: str) -> IssuedReset:
        """
        Issue a reset OTP for `email`.

        Raises:
            InvalidInput: `email` does not have the ``local@domain.tld`` shape.
            DirectoryUnavailable: The directory lookup failed.
            AccountNotFound: No account is registered under `email`.
            OTPDeliveryFailed: The email could not be sent or the entry
                could not be stored.

        Returns:
            IssuedReset: The store token and the OTP that was sent.
        """

        try:
            email_shape_validator(email)
        except ValidationError as exc:
            raise InvalidInput() from exc

        accounts = self._find_accounts(email)
        if not accounts:
            logger.info(
                "Password reset attempt for non-existent account: %s",
                mask_email(email),
            )
            raise AccountNotFound()

        otp = OTPService.generate_code()

        try:
            self.mailer.send_reset_otp(email, otp)
        except EmailDeliveryError as exc:
            logger.error("Failed to send reset OTP to %s: %s", mask_email(email), exc)
            raise OTPDeliveryFailed() from exc

        try:
            token = self.store.save(self.category, email, otp)
        except TokenStoreError as exc:
            logger.error("Failed to store reset OTP for %s: %s", mask_email(email), exc)
            raise OTPDeliveryFailed() from exc

        logger.info("Password reset OTP issued for %s", mask_email(email))
        return IssuedReset(token=token, otp=otp)

    def verify_otp(self, token: str, otp: str) -> str:
        """
        Check `otp` against the entry stored under `token`.

        Rules:
            - No entry, or an entry of another category → invalid.
            - Max attempts already used → entry deleted, invalid.
            - Code matches → entry deleted, reset token returned.
            - Otherwise the failed attempt is recorded → invalid.

        Raises:
            InvalidResetCode: The code is wrong, expired, or exhausted.
            AccountNotFound: The account disappeared since the OTP was issued.
            ResetStoreUnavailable: The token store failed.
            DirectoryUnavailable: The directory lookup failed.

        Returns:
            str: A signed reset token valid for `RESET_TOKEN_MAX_AGE` seconds.
        """

        try:
            entry = self.store.get(token)
            if not entry or entry.get("category") != self.category:
                raise InvalidResetCode()

            if not hmac.compare_digest(str(entry.get("otp", "")), otp):
                attempts = self.store.register_failed_attempt(token)
                if attempts >= MAX_OTP_ATTEMPTS:
                    logger.warning(
                        "Too many reset attempts for %s, discarding entry",
                        mask_email(entry.get("email", "")),
                    )
                    self.store.delete(token)
                raise InvalidResetCode()

            self.store.delete(token)
        except TokenStoreError as exc:
            logger.error("Token store failure during OTP verification: %s", exc)
            raise ResetStoreUnavailable() from exc

        email = entry["email"]
        accounts = self._find_accounts(email)
        if not accounts:
            raise AccountNotFound(Messages.USER_NOT_FOUND)

        logger.info("Password reset OTP verified for %s", mask_email(email))
        return self._signer().sign(str(accounts[0].id))

    def set_password(self, reset_token: str, password: str) -> None:
        """
        Replace the password of the account bound to `reset_token`.

        Raises:
            InvalidResetToken: The token expired or its signature is invalid.
            AccountNotFound: The account no longer exists.
            DirectoryUnavailable: The directory update failed.
        """

        try:
            account_id = self._signer().unsign(reset_token, max_age=RESET_TOKEN_MAX_AGE)
        except SignatureExpired as exc:
            raise InvalidResetToken(Messages.RESET_LINK_EXPIRED) from exc
        except BadSignature as exc:
            raise InvalidResetToken(Messages.RESET_LINK_INVALID) from exc

        try:
            updated = self.directory.set_password(account_id, password)
        except DirectoryError as exc:
            logger.error("Password update failed for account %s: %s", account_id, exc)
            raise DirectoryUnavailable() from exc

        if not updated:
            raise AccountNotFound(Messages.USER_NOT_FOUND)

        logger.info("Password reset completed for account %s", account_id)


def build_password_reset_service(config=None) -> PasswordResetService:
    """
    Build a `PasswordResetService` from the `PASSWORD_RESET` setting.

    Args:
        config (dict, optional): Mapping with ``DIRECTORY``, ``MAILER`` and
            ``STORE`` dotted class paths. Defaults to `settings.PASSWORD_RESET`.

    Returns:
        PasswordResetService: Service wired with fresh collaborator instances.
    """

    config = config if config is not None else settings.PASSWORD_RESET
    return PasswordResetService(
        directory=import_string(config["DIRECTORY"])(),
        mailer=import_string(config["MAILER"])(),
        store=import_string(config["STORE"])(),
    )
