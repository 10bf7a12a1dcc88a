"""
Password reset ViewSet.

This module exposes the OTP-based password reset flow as REST API endpoints
using Django REST Framework. The heavy lifting happens in
`accounts.services.PasswordResetService`; the views validate input, call the
service, and translate its outcome into the JSON contract below.

Core Workflow:
    1. POST /password-reset/request -> User submits an email; an OTP is sent
       and a token identifying the pending request is returned.
    2. POST /password-reset/verify  -> User echoes the OTP with the token and
       receives a short-lived signed reset token.
    3. POST /password-reset/set     -> User sets a new password with it.

Every error is answered as ``{"error": "<message>"}``. Downstream failures
are logged by the service and reported with a generic 500 body; unexpected
exceptions are logged with their traceback and reported the same way.
"""

import logging

from django.apps import apps
from django.conf import settings
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.viewsets import ViewSet

from .constants import Messages
from .exceptions import PasswordResetError
from .serializers import (
    PasswordResetRequestSerializer,
    PasswordResetSetPasswordSerializer,
    PasswordResetVerifySerializer,
    first_error,
)

logger = logging.getLogger(__name__)


def expose_development_otp():
    """Whether the raw OTP may be echoed back (never in production)."""

    return settings.DEPLOYMENT_MODE != "production"


def error_response(message, status_code):
    return Response({"error": str(message)}, status=status_code)


class OTPThrottle(AnonRateThrottle):
    """
    Custom rate throttle for OTP requests.

    This prevents abuse of the OTP system by limiting how often
    anonymous clients can request or check codes.
    """

    # DRF will look for this key in the settings to apply limits (e.g., "otp": "5/minute")
    scope = "otp"


class PasswordResetViewSet(ViewSet):
    """
    A ViewSet that handles the OTP-based password reset flow.

    Endpoints:
        - request → Email a reset OTP and return the token of the pending request.
        - verify → Check the OTP and return a signed reset token.
        - set → Set a new password using the reset token.
    """

    parser_classes = [JSONParser, FormParser, MultiPartParser]
    permission_classes = [AllowAny]

    def get_service(self):
        return apps.get_app_config("accounts").password_reset

    def run_step(self, step, *args):
        """
        Call a service step, translating its failures into error responses.

        Returns:
            tuple: ``(result, None)`` on success, ``(None, Response)`` on failure.
        """

        try:
            return step(*args), None
        except PasswordResetError as exc:
            return None, error_response(exc.message, exc.status_code)
        except Exception:
            logger.exception("Unhandled error in password reset flow")
            return None, error_response(
                Messages.INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @extend_schema(
        tags=["Password Management"],
        summary="1. Request Password Reset OTP",
        description="""
        **Endpoint**: POST /password-reset/request

        Starts the password reset by emailing a 6-digit OTP.

        **Step-by-Step Workflow**:
        1. Validate the email shape.
        2. Confirm an account exists for the email.
        3. Generate the OTP and email it.
        4. Store `{category, email, otp}` under a new token for 10 minutes.
        5. Return the token (and the OTP outside production).

        **Request Formats**:
        - JSON: `{"email": "user@example.com"}`

        **Error Handling**:
        - 400: Missing or malformed email.
        - 404: No account for this email.
        - 429: Rate limit.
        - 500: Directory, email or store failure.
        """,
        request=PasswordResetRequestSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(
                description="OTP sent.",
                examples={
                    "sent": OpenApiExample(
                        "Reset Started",
                        value={
                            "message": "Password reset OTP sent successfully",
                            "token": "0b6c7a3e-4f1d-4d2b-9a57-1e2f3c4d5e6f",
                            "developmentOTP": "482913",
                        },
                    )
                },
            ),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(
                description="Invalid email.",
                examples={
                    "missing": OpenApiExample(
                        "Missing Email", value={"error": "Email is required"}
                    ),
                    "invalid": OpenApiExample(
                        "Bad Format", value={"error": "Invalid email format"}
                    ),
                },
            ),
            status.HTTP_404_NOT_FOUND: OpenApiResponse(
                description="No account.",
                examples={
                    "no_user": OpenApiExample(
                        "No Account",
                        value={"error": "Account not found. Please sign up first."},
                    )
                },
            ),
            status.HTTP_500_INTERNAL_SERVER_ERROR: OpenApiResponse(
                description="Downstream failure.",
                examples={
                    "lookup": OpenApiExample(
                        "Lookup Failed",
                        value={
                            "error": "An internal error occurred during user verification."
                        },
                    ),
                    "send": OpenApiExample(
                        "Send Failed", value={"error": "Internal server error"}
                    ),
                },
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="request",
        url_name="request",
        throttle_classes=[OTPThrottle],
    )
    def request_otp(self, request):
        """
        Request a password reset OTP.

        Request body:
            - email (str): Address of the account.

        Returns:
            - 200 OK with the token (and developmentOTP outside production).
            - 400 / 404 / 500 with an ``error`` message.
        """

        serializer = PasswordResetRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                first_error(serializer.errors), status.HTTP_400_BAD_REQUEST
            )

        email = serializer.validated_data["email"]
        issued, failure = self.run_step(self.get_service().issue_otp, email)
        if failure is not None:
            return failure

        data = {"message": str(Messages.OTP_SENT), "token": issued.token}
        if expose_development_otp():
            data["developmentOTP"] = issued.otp

        return Response(data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Password Management"],
        summary="2. Verify Password Reset OTP",
        description="""
        **Endpoint**: POST /password-reset/verify

        Confirms the OTP and issues a short-lived reset_token.

        **Step-by-Step Workflow**:
        1. Load the pending request stored under `token`.
        2. Compare the OTP; failed attempts are counted (5 max).
        3. Delete the pending request (single use).
        4. Sign the account ID with TimestampSigner (5min expiry).

        **Request Format**: JSON: `{"token": "...", "otp": "123456"}`

        **Output**: `reset_token` – use in next step.

        **Error Handling**:
        - 400: Missing fields, invalid or expired code.
        - 404: Account removed since the request.
        """,
        request=PasswordResetVerifySerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(
                description="Verified; token issued.",
                examples={
                    "verified": OpenApiExample(
                        "Token Ready",
                        value={
                            "message": "Code verified. You can now set a new password.",
                            "reset_token": "42:1tXyZa:signature",
                        },
                    )
                },
            ),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(
                description="Bad OTP.",
                examples={
                    "invalid": OpenApiExample(
                        "Expired", value={"error": "Invalid or expired OTP."}
                    )
                },
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="verify",
        url_name="verify",
        throttle_classes=[OTPThrottle],
    )
    def verify_otp(self, request):
        """
        Verify OTP for password reset.

        Request body:
            - token (str): Token returned by the request step.
            - otp (str): The code received by email.

        Returns:
            - 200 OK with a reset token.
            - 400 Bad Request if the OTP is invalid or expired.
        """

        serializer = PasswordResetVerifySerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                first_error(serializer.errors), status.HTTP_400_BAD_REQUEST
            )

        reset_token, failure = self.run_step(
            self.get_service().verify_otp,
            serializer.validated_data["token"],
            serializer.validated_data["otp"],
        )
        if failure is not None:
            return failure

        return Response(
            {"message": str(Messages.CODE_VERIFIED), "reset_token": reset_token},
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Password Management"],
        summary="3. Set New Password",
        description="""
        **Endpoint**: POST /password-reset/set

        Finalizes reset by updating password.

        **Step-by-Step Workflow**:
        1. Validate passwords match.
        2. Unsign token (check expiry/signature).
        3. Set hashed password on the account.

        **Request Format**: JSON: `{"password": "newpass", "password_confirm": "newpass", "reset_token": "..."}`

        **Error Handling**:
        - 400: Mismatch or expired token.
        - 404: Account not found.
        """,
        request=PasswordResetSetPasswordSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(
                description="Password updated.",
                examples={
                    "updated": OpenApiExample(
                        "Reset Complete",
                        value={"message": "Password has been reset successfully."},
                    )
                },
            ),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(
                description="Token or password error.",
                examples={
                    "expired": OpenApiExample(
                        "Expired Token",
                        value={"error": "Password reset link has expired."},
                    ),
                    "mismatch": OpenApiExample(
                        "No Match", value={"error": "Passwords do not match."}
                    ),
                },
            ),
            status.HTTP_404_NOT_FOUND: OpenApiResponse(
                description="Account invalid.",
                examples={
                    "not_found": OpenApiExample(
                        "No User", value={"error": "User not found."}
                    )
                },
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="set",
        url_name="set",
        throttle_classes=[OTPThrottle],
    )
    def set_password(self, request):
        """
        Set a new password after OTP verification.

        Request body:
            - password (str): New password.
            - password_confirm (str): Confirmation.
            - reset_token (str): Token from verify step.
        """

        serializer = PasswordResetSetPasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(
                first_error(serializer.errors), status.HTTP_400_BAD_REQUEST
            )

        _, failure = self.run_step(
            self.get_service().set_password,
            serializer.validated_data["reset_token"],
            serializer.validated_data["password"],
        )
        if failure is not None:
            return failure

        return Response(
            {"message": str(Messages.PASSWORD_RESET_DONE)}, status=status.HTTP_200_OK
        )
