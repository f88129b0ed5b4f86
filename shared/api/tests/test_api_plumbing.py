"""Tests for the service endpoints, error responses and cookie authentication."""

from __future__ import annotations

import importlib
import os
from decimal import Decimal
from unittest import mock

from django.db.utils import OperationalError
from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.views import BookingViewSet
from apps.properties.models import Property
from apps.users.models import User
from config.settings import base as base_settings


class ServiceEndpointTests(APITestCase):
    def test_service_banner(self) -> None:
        response = self.client.get(reverse("service-root"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"message": "TravelTrove Backend API", "status": "running"})

    def test_health_reports_database(self) -> None:
        response = self.client.get(reverse("health"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "ok")
        self.assertTrue(response.data["database_connected"])

    def test_health_survives_database_outage(self) -> None:
        with mock.patch("shared.api.views.connection") as connection:
            connection.ensure_connection.side_effect = OperationalError("connection refused")
            with self.assertLogs("shared.api.views", "WARNING"):
                response = self.client.get(reverse("health"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["database_connected"])


class ErrorResponseTests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="guest@example.com", name="Asha Guest", password="Secret#123")
        self.client.force_authenticate(self.user)

    def test_unexpected_error_returns_generic_500(self) -> None:
        with mock.patch.object(BookingViewSet, "my", side_effect=RuntimeError("database exploded")):
            with self.assertLogs("shared.api.exceptions", "ERROR") as logs:
                response = self.client.get(reverse("bookings:booking-my"))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"message": "Server error"})
        self.assertIn("database exploded", logs.output[0])

    def test_drf_errors_gain_message(self) -> None:
        response = self.client.get(reverse("bookings:booking-detail", args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("message", response.data)


class CookieAuthenticationTests(APITestCase):
    def setUp(self) -> None:
        host = User.objects.create_user(
            email="host@example.com",
            name="Ravi Host",
            password="Secret#123",
            is_host=True,
        )
        self.property = Property.objects.create(
            host=host,
            name="Sea Breeze Villa",
            property_type=Property.PropertyType.VILLA,
            state="Goa",
            city="Panaji",
            address="12 Beach Road",
            price_per_day=Decimal("2500.00"),
            images=[f"https://media.test/{i}.jpg" for i in range(5)],
        )
        self.client.cookies["jwt"] = "stale.token.value"

    def test_stale_cookie_does_not_block_public_endpoints(self) -> None:
        listing = self.client.get(reverse("properties:property-list"))
        self.assertEqual(listing.status_code, status.HTTP_200_OK, listing.data)

        detail = self.client.get(reverse("properties:property-detail", args=[self.property.pk]))
        self.assertEqual(detail.status_code, status.HTTP_200_OK, detail.data)

        quote = self.client.post(
            reverse("bookings:booking-quote"),
            {"property": self.property.pk, "check_in": "2026-05-01", "check_out": "2026-05-03"},
            format="json",
        )
        self.assertEqual(quote.status_code, status.HTTP_200_OK, quote.data)

    def test_stale_cookie_is_anonymous_on_protected_endpoints(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_header_token_is_used_when_cookie_is_stale(self) -> None:
        login = self.client.post(
            reverse("auth:login"),
            {"email": "host@example.com", "password": "Secret#123"},
            format="json",
        )
        self.client.cookies["jwt"] = "stale.token.value"
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")

        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["user"]["email"], "host@example.com")

    def test_invalid_header_token_is_rejected(self) -> None:
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = self.client.get(reverse("properties:property-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class AllowedHostsSettingTests(SimpleTestCase):
    def tearDown(self) -> None:
        importlib.reload(base_settings)

    def test_base_settings_do_not_allow_every_host(self) -> None:
        with mock.patch.dict(os.environ):
            os.environ.pop("DJANGO_ALLOWED_HOSTS", None)
            importlib.reload(base_settings)

        self.assertEqual(base_settings.ALLOWED_HOSTS, ["localhost", "127.0.0.1"])
        self.assertNotIn("*", base_settings.ALLOWED_HOSTS)
