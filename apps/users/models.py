"""User domain models for TravelTrove.

A single account type covers both marketplace roles: every user can book
as a guest, and a user becomes a host once they list a property or link a
payment account that receives payouts. The model also keeps contact
verification codes and login-lockout counters.
"""

from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^[0-9+\-() ]{7,15}$",
    message=_("Invalid phone format"),
)


class CustomUserManager(BaseUserManager):
    """User manager that uses the email address as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("An email address is required to create a user.")
        email = self.normalize_email(email)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Marketplace account (guest and, optionally, host)."""

    class VerificationChannel(models.TextChoices):
        EMAIL = "email", _("Email")
        PHONE = "phone", _("Phone")

    username = None
    first_name = None
    last_name = None

    name = models.CharField(_("Name"), max_length=150)
    email = models.EmailField(_("Email"), unique=True)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    avatar = models.URLField(_("Avatar"), max_length=500, blank=True)
    is_host = models.BooleanField(_("Host"), default=False)
    payment_account_id = models.CharField(
        _("Payment account"),
        max_length=64,
        blank=True,
        help_text=_("Razorpay linked account that receives payouts for bookings."),
    )
    email_verification_code = models.CharField(max_length=6, blank=True)
    phone_verification_code = models.CharField(max_length=6, blank=True)
    verification_expires_at = models.DateTimeField(null=True, blank=True)
    is_email_verified = models.BooleanField(_("Email verified"), default=False)
    is_phone_verified = models.BooleanField(_("Phone verified"), default=False)
    failed_login_attempts = models.PositiveIntegerField(default=0)
    locked_until = models.DateTimeField(_("Locked until"), null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    # --- Host helpers -------------------------------------------------------
    @property
    def has_payment_account(self) -> bool:
        return bool(self.payment_account_id)

    def link_payment_account(self, account_id: str) -> None:
        self.payment_account_id = account_id
        self.is_host = True
        self.save(update_fields=["payment_account_id", "is_host", "updated_at"])

    def mark_host(self) -> None:
        if not self.is_host:
            self.is_host = True
            self.save(update_fields=["is_host", "updated_at"])

    # --- Contact verification -----------------------------------------------
    def issue_verification_codes(self, ttl_hours: int) -> None:
        self.email_verification_code = f"{secrets.randbelow(1_000_000):06d}"
        self.phone_verification_code = f"{secrets.randbelow(1_000_000):06d}"
        self.verification_expires_at = timezone.now() + timedelta(hours=ttl_hours)
        self.save(
            update_fields=[
                "email_verification_code",
                "phone_verification_code",
                "verification_expires_at",
            ]
        )

    @property
    def verification_expired(self) -> bool:
        return bool(self.verification_expires_at and self.verification_expires_at < timezone.now())

    def verification_code_for(self, channel: str) -> str:
        if channel == self.VerificationChannel.EMAIL:
            return self.email_verification_code
        return self.phone_verification_code

    def mark_verified(self, channel: str) -> None:
        if channel == self.VerificationChannel.EMAIL:
            self.is_email_verified = True
            self.email_verification_code = ""
            fields = ["is_email_verified", "email_verification_code"]
        else:
            self.is_phone_verified = True
            self.phone_verification_code = ""
            fields = ["is_phone_verified", "phone_verification_code"]
        self.save(update_fields=fields)

    # --- Login lockout ------------------------------------------------------
    @property
    def is_locked(self) -> bool:
        return bool(self.locked_until and self.locked_until > timezone.now())

    def lock(self, minutes: int = 15) -> None:
        self.locked_until = timezone.now() + timedelta(minutes=minutes)
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def unlock(self) -> None:
        if self.locked_until is None and self.failed_login_attempts == 0:
            return
        self.locked_until = None
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def register_failed_attempt(self, threshold: int = 5, lock_minutes: int = 15) -> None:
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= threshold:
            self.lock(minutes=lock_minutes)
            return
        self.save(update_fields=["failed_login_attempts"])


# Backwards compatibility alias used in tests
User = CustomUser
