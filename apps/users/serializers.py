"""Serializers for user profile endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profile representation returned by every auth endpoint."""

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "avatar",
            "is_host",
            "payment_account_id",
            "is_email_verified",
            "is_phone_verified",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Contact card of a host or guest embedded in listings and bookings."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "phone", "avatar"]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(max_length=20, validators=[PHONE_VALIDATOR], required=False)

    class Meta:
        model = User
        fields = ["name", "phone", "avatar"]
        extra_kwargs = {
            "name": {"required": False},
            "avatar": {"required": False, "allow_blank": True},
        }

    def validate_phone(self, value: str) -> str:
        clash = User.objects.filter(phone=value).exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError("Phone already in use")
        return value
