"""Serializers for authentication flows.

Covers registration, login, password change, contact verification and the
host payment-account onboarding steps.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.password_validation import validate_password  # type: ignore
from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore

from .models import PHONE_VALIDATOR, CustomUser


User = get_user_model()

EMAIL_ERRORS = {"invalid": "Invalid email format"}


def check_password_policy(password: str, user=None) -> str:
    try:
        validate_password(password, user=user)
    except DjangoValidationError as exc:
        raise serializers.ValidationError(list(exc.messages))
    return password


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField(error_messages=EMAIL_ERRORS)
    phone = serializers.CharField(max_length=20, validators=[PHONE_VALIDATOR])
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    avatar = serializers.URLField(required=False, allow_blank=True)
    is_host = serializers.BooleanField(required=False, default=False)

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already in use")
        return value

    def validate_phone(self, value: str) -> str:
        if User.objects.filter(phone=value).exists():
            raise serializers.ValidationError("Phone already in use")
        return value

    def validate_password(self, value: str) -> str:
        return check_password_policy(value)

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages=EMAIL_ERRORS)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=["host", "guest"], required=False)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise serializers.ValidationError("Invalid credentials")

        if user.is_locked:
            raise serializers.ValidationError("Account temporarily locked. Try again later.")

        if not user.is_active or not user.check_password(attrs["password"]):
            user.register_failed_attempt(
                threshold=settings.LOGIN_LOCK_THRESHOLD,
                lock_minutes=settings.LOGIN_LOCK_MINUTES,
            )
            raise serializers.ValidationError("Invalid credentials")

        user.unlock()
        attrs["user"] = user
        return attrs


class PasswordChangeSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_old_password(self, value: str) -> str:
        if not self.context["request"].user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value

    def validate_new_password(self, value: str) -> str:
        return check_password_policy(value, user=self.context["request"].user)

    def save(self, **kwargs):  # type: ignore
        user = self.context["request"].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password", "updated_at"])
        return user


class VerifyContactSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    type = serializers.ChoiceField(
        choices=CustomUser.VerificationChannel.choices,
        error_messages={"invalid_choice": "Invalid type"},
    )
    token = serializers.CharField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = User.objects.filter(pk=attrs["user_id"]).first()
        if user is None:
            raise NotFound("User not found")
        if user.verification_expired:
            raise serializers.ValidationError("Token expired")
        expected = user.verification_code_for(attrs["type"])
        if not expected or expected != attrs["token"]:
            raise serializers.ValidationError("Invalid token")
        attrs["user"] = user
        return attrs

    def save(self, **kwargs):  # type: ignore
        user = self.validated_data["user"]
        user.mark_verified(self.validated_data["type"])
        return user


class PaymentAccountSerializer(serializers.Serializer):
    payment_account_id = serializers.CharField(max_length=64)


class PaymentOnboardingSerializer(serializers.Serializer):
    business_name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=20, validators=[PHONE_VALIDATOR])
    email = serializers.EmailField(required=False, error_messages=EMAIL_ERRORS)


class OnboardingWebhookSerializer(serializers.Serializer):
    merchant = serializers.IntegerField(help_text="Id of the user the onboarding link was issued for.")
    payment_account_id = serializers.CharField(max_length=64)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = User.objects.filter(pk=attrs["merchant"]).first()
        if user is None:
            raise NotFound("User not found")
        attrs["user"] = user
        return attrs
