"""
Email dispatcher for one-time password messages.

Messages go through Django's email framework, so the transport is chosen by
the `EMAIL_BACKEND` setting: SMTP in deployed environments, the console
backend during local development, and the in-memory backend under test.
"""

import logging
import smtplib

from django.conf import settings
from django.core.mail import EmailMultiAlternatives

from .constants import RESET_EMAIL_SUBJECT, RESET_TTL_SECONDS
from .exceptions import EmailDeliveryError
from .utils import mask_email

logger = logging.getLogger(__name__)

RESET_EMAIL_HTML = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2>Password Reset OTP</h2>
  <p>Your OTP for {site_name} password reset is:</p>
  <div style="background-color: #f5f5f5; padding: 20px; text-align: center; font-size: 24px; font-weight: bold; letter-spacing: 2px; margin: 20px 0;">
    {otp}
  </div>
  <p>This OTP will expire in {minutes} minutes.</p>
  <p>If you didn't request this password reset, please ignore this email.</p>
</div>
"""

RESET_EMAIL_TEXT = (
    "Your OTP for {site_name} password reset is: {otp}\n\n"
    "This OTP will expire in {minutes} minutes.\n"
    "If you didn't request this password reset, please ignore this email.\n"
)


class OTPMailer:
    """Sends OTP emails from `DEFAULT_FROM_EMAIL`."""

    def __init__(self, from_email=None, connection=None):
        self.from_email = from_email
        self.connection = connection

    def send(self, to: str, subject: str, html_body: str, text_body: str = "") -> None:
        """
        Send a single HTML message with a plain-text alternative.

        Raises:
            EmailDeliveryError: If the transport fails or rejects the message.
        """

        message = EmailMultiAlternatives(
            subject=subject,
            body=text_body,
            from_email=self.from_email or settings.DEFAULT_FROM_EMAIL,
            to=[to],
            connection=self.connection,
        )
        message.attach_alternative(html_body, "text/html")

        try:
            sent = message.send(fail_silently=False)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(str(exc)) from exc

        if not sent:
            raise EmailDeliveryError("email backend reported no message sent")

        logger.info("Sent '%s' email to %s", subject, mask_email(to))

    def send_reset_otp(self, to: str, otp: str) -> None:
        context = {
            "otp": otp,
            "site_name": getattr(settings, "SITE_NAME", "our site"),
            "minutes": RESET_TTL_SECONDS // 60,
        }
        self.send(
            to=to,
            subject=RESET_EMAIL_SUBJECT,
            html_body=RESET_EMAIL_HTML.format(**context),
            text_body=RESET_EMAIL_TEXT.format(**context),
        )
