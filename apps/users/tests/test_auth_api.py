"""API tests for authentication endpoints."""

from __future__ import annotations

import hashlib
import hmac
import json
from datetime import timedelta

from django.core import mail
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


REGISTER_PAYLOAD = {
    "name": "Asha Guest",
    "email": "guest@example.com",
    "phone": "+919800000001",
    "password": "Secret#123",
}


class RegisterAPITests(APITestCase):
    def test_register_returns_tokens_and_authenticates(self) -> None:
        response = self.client.post(reverse("auth:register"), REGISTER_PAYLOAD, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "success")
        self.assertIn("token", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["email"], REGISTER_PAYLOAD["email"])
        self.assertIn("jwt", response.cookies)

        me = self.client.get(reverse("auth:me"))
        self.assertEqual(me.status_code, status.HTTP_200_OK, me.data)
        self.assertEqual(me.data["user"]["name"], "Asha Guest")

    def test_register_sends_verification_codes(self) -> None:
        self.client.post(reverse("auth:register"), REGISTER_PAYLOAD, format="json")

        user = User.objects.get(email=REGISTER_PAYLOAD["email"])
        self.assertEqual(len(user.email_verification_code), 6)
        self.assertIsNotNone(user.verification_expires_at)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(user.email_verification_code, mail.outbox[0].body)

    def test_password_without_digit_is_rejected(self) -> None:
        payload = {**REGISTER_PAYLOAD, "password": "Secret#abc"}
        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data)
        self.assertEqual(response.data["message"], "Password must contain at least one number")
        self.assertFalse(User.objects.exists())

    def test_password_without_special_character_is_rejected(self) -> None:
        payload = {**REGISTER_PAYLOAD, "password": "Secret1234"}
        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["message"], "Password must contain at least one special character"
        )

    def test_short_password_is_rejected(self) -> None:
        payload = {**REGISTER_PAYLOAD, "password": "a#1"}
        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_email_is_rejected(self) -> None:
        User.objects.create_user(email="guest@example.com", name="Existing", password="Secret#123")

        response = self.client.post(reverse("auth:register"), REGISTER_PAYLOAD, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Email already in use")

    def test_invalid_phone_is_rejected(self) -> None:
        payload = {**REGISTER_PAYLOAD, "phone": "call-me"}
        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone", response.data)


class LoginAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="host@example.com",
            name="Ravi Host",
            phone="+919800000002",
            password="Secret#123",
        )

    def test_login_returns_envelope(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "host@example.com", "password": "Secret#123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["user"]["id"], self.user.pk)
        self.assertIn("jwt", response.cookies)

    def test_role_shapes_host_flag_in_response_only(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "host@example.com", "password": "Secret#123", "role": "host"},
            format="json",
        )
        self.assertTrue(response.data["user"]["is_host"])
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_host)

    def test_wrong_password_is_rejected(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "host@example.com", "password": "Wrong#123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Invalid credentials")

    def test_login_limited_attempts(self) -> None:
        url = reverse("auth:login")
        wrong_payload = {"email": self.user.email, "password": "Wrong#123"}
        for _ in range(5):
            response = self.client.post(url, wrong_payload, format="json")

        self.user.refresh_from_db()
        self.assertTrue(self.user.is_locked)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(url, {"email": self.user.email, "password": "Secret#123"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        # After lock expires user can login again
        self.user.locked_until = timezone.now() - timedelta(minutes=1)
        self.user.save(update_fields=["locked_until"])
        response = self.client.post(url, {"email": self.user.email, "password": "Secret#123"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_logout_clears_cookie(self) -> None:
        self.client.post(
            reverse("auth:login"),
            {"email": "host@example.com", "password": "Secret#123"},
            format="json",
        )
        response = self.client.post(reverse("auth:logout"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.cookies["jwt"].value, "")
        self.assertEqual(self.client.get(reverse("auth:me")).status_code, status.HTTP_401_UNAUTHORIZED)


class ProfileAPITests(APITestCase):
    def setUp(self) -> None:
        response = self.client.post(reverse("auth:register"), REGISTER_PAYLOAD, format="json")
        self.token = response.data["token"]
        self.user = User.objects.get(email=REGISTER_PAYLOAD["email"])

    def test_update_profile(self) -> None:
        response = self.client.patch(
            reverse("auth:me"),
            {"name": "Asha K", "avatar": "https://cdn.example.com/a.png"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["user"]["name"], "Asha K")
        self.assertEqual(response.data["user"]["email"], REGISTER_PAYLOAD["email"])

    def test_update_profile_rejects_taken_phone(self) -> None:
        User.objects.create_user(email="other@example.com", name="Other", phone="+919811111111")

        response = self.client.patch(reverse("auth:me"), {"phone": "+919811111111"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Phone already in use")

    def test_change_password(self) -> None:
        response = self.client.patch(
            reverse("auth:password-change"),
            {"old_password": "Secret#123", "new_password": "Better#456"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Better#456"))

    def test_change_password_requires_current_password(self) -> None:
        response = self.client.patch(
            reverse("auth:password-change"),
            {"old_password": "Nope#123", "new_password": "Better#456"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Current password is incorrect")

    def test_change_password_applies_policy(self) -> None:
        response = self.client.patch(
            reverse("auth:password-change"),
            {"old_password": "Secret#123", "new_password": "weakpassword"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_deleted_account_cannot_authenticate(self) -> None:
        response = self.client.delete(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(User.objects.filter(email=REGISTER_PAYLOAD["email"]).exists())

        login = self.client.post(
            reverse("auth:login"),
            {"email": REGISTER_PAYLOAD["email"], "password": REGISTER_PAYLOAD["password"]},
            format="json",
        )
        self.assertEqual(login.status_code, status.HTTP_400_BAD_REQUEST)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token}")
        me = self.client.get(reverse("auth:me"))
        self.assertEqual(me.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_requires_authentication(self) -> None:
        self.client.post(reverse("auth:logout"))
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("message", response.data)


class VerifyContactAPITests(APITestCase):
    def setUp(self) -> None:
        self.client.post(reverse("auth:register"), REGISTER_PAYLOAD, format="json")
        self.user = User.objects.get(email=REGISTER_PAYLOAD["email"])

    def test_verify_email(self) -> None:
        response = self.client.post(
            reverse("auth:verify"),
            {"user_id": self.user.pk, "type": "email", "token": self.user.email_verification_code},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_email_verified)
        self.assertFalse(self.user.is_phone_verified)

    def test_verify_phone_with_wrong_token(self) -> None:
        response = self.client.post(
            reverse("auth:verify"),
            {"user_id": self.user.pk, "type": "phone", "token": "000000x"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Invalid token")

    def test_verify_expired_token(self) -> None:
        self.user.verification_expires_at = timezone.now() - timedelta(minutes=1)
        self.user.save(update_fields=["verification_expires_at"])

        response = self.client.post(
            reverse("auth:verify"),
            {"user_id": self.user.pk, "type": "email", "token": self.user.email_verification_code},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Token expired")

    def test_verify_unknown_user(self) -> None:
        response = self.client.post(
            reverse("auth:verify"),
            {"user_id": 999999, "type": "email", "token": "123456"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "User not found")


class PaymentAccountAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="host@example.com",
            name="Ravi Host",
            password="Secret#123",
        )
        self.client.force_authenticate(self.user)

    def test_link_payment_account_marks_host(self) -> None:
        response = self.client.post(
            reverse("auth:payment-account"),
            {"payment_account_id": "acc_ABC123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.payment_account_id, "acc_ABC123")
        self.assertTrue(self.user.is_host)

    def test_onboarding_returns_link(self) -> None:
        response = self.client.post(
            reverse("auth:payment-onboarding"),
            {"business_name": "Ravi Stays", "phone": "+919800000002"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn(f"merchant={self.user.pk}", response.data["onboarding_url"])

    def test_onboarding_requires_business_name(self) -> None:
        response = self.client.post(
            reverse("auth:payment-onboarding"),
            {"phone": "+919800000002"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_onboarding_webhook_links_account(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.post(
            reverse("auth:payment-onboarding-webhook"),
            {"merchant": self.user.pk, "payment_account_id": "acc_HOOK1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.payment_account_id, "acc_HOOK1")
        self.assertTrue(self.user.is_host)

    @override_settings(RAZORPAY_WEBHOOK_SECRET="whsec_test")
    def test_onboarding_webhook_checks_signature(self) -> None:
        self.client.force_authenticate(None)
        body = json.dumps({"merchant": self.user.pk, "payment_account_id": "acc_SIGNED"})
        url = reverse("auth:payment-onboarding-webhook")

        rejected = self.client.post(
            url, body, content_type="application/json", HTTP_X_RAZORPAY_SIGNATURE="bad"
        )
        self.assertEqual(rejected.status_code, status.HTTP_403_FORBIDDEN)

        signature = hmac.new(b"whsec_test", body.encode(), hashlib.sha256).hexdigest()
        accepted = self.client.post(
            url, body, content_type="application/json", HTTP_X_RAZORPAY_SIGNATURE=signature
        )
        self.assertEqual(accepted.status_code, status.HTTP_200_OK, accepted.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.payment_account_id, "acc_SIGNED")
