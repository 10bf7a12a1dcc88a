from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """
    App configuration for accounts and password reset.

    `ready()` builds the password-reset service once per process, wiring the
    collaborators named in the `PASSWORD_RESET` setting. Views read it from
    ``apps.get_app_config("accounts").password_reset``.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Accounts"

    password_reset = None

    def ready(self):
        from .services import build_password_reset_service

        self.password_reset = build_password_reset_service()
