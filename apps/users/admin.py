"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin  # type: ignore
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal info"), {"fields": ("name", "phone", "avatar")}),
        (_("Host"), {"fields": ("is_host", "payment_account_id")}),
        (
            _("Verification"),
            {
                "fields": (
                    "is_email_verified",
                    "is_phone_verified",
                    "verification_expires_at",
                )
            },
        ),
        (_("Security"), {"fields": ("failed_login_attempts", "locked_until")}),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "phone", "password1", "password2", "is_host"),
            },
        ),
    )
    list_display = (
        "email",
        "name",
        "phone",
        "is_host",
        "is_active",
        "is_email_verified",
        "is_locked",
    )
    list_filter = ("is_host", "is_active", "is_staff", "is_email_verified")
    search_fields = ("email", "phone", "name", "payment_account_id")
    ordering = ("email",)
    readonly_fields = ("created_at", "updated_at", "date_joined")

    @admin.display(boolean=True, description=_("Locked"))
    def is_locked(self, obj: CustomUser) -> bool:
        return obj.is_locked
