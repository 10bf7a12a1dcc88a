"""
Admin configuration for accounts.

Registers `Account` with the Django admin, extending `UserAdmin` so staff can
look up the accounts password resets are issued for and deactivate them
(inactive accounts are invisible to the reset flow).
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .forms import AccountChangeForm, AccountCreationForm
from .models import Account


@admin.register(Account)
class AccountAdmin(UserAdmin):
    """Admin for `Account`, keyed on email instead of username."""

    add_form = AccountCreationForm
    form = AccountChangeForm

    list_display = ("id", "email", "first_name", "last_name", "is_active")
    list_display_links = ("id", "email")
    search_fields = ("email", "first_name", "last_name")
    list_filter = ("is_staff", "is_active")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Personal info", {"fields": ("first_name", "last_name")}),
        (
            "Permissions",
            {"fields": ("is_active", "is_staff", "is_superuser", "groups")},
        ),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )
    readonly_fields = ("last_login", "date_joined")

    # newest accounts first
    ordering = ("-date_joined",)
