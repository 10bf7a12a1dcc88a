"""
URL routing configuration for the password reset API.

Registered routes:
    - /password-reset/request → Request a reset OTP by email
    - /password-reset/verify  → Verify the OTP, receive a reset token
    - /password-reset/set     → Set a new password with the reset token
"""

from rest_framework.routers import DefaultRouter

from .views import PasswordResetViewSet

# Routes are served without a trailing slash. `basename` is required since the
# ViewSet has no queryset; reverse() names are "password-reset-request",
# "password-reset-verify", "password-reset-set".
router = DefaultRouter(trailing_slash=False)
router.register("password-reset", PasswordResetViewSet, basename="password-reset")

urlpatterns = router.urls
