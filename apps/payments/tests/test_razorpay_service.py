"""Tests for the Razorpay gateway client."""

from __future__ import annotations

import hashlib
import hmac
from decimal import Decimal
from unittest import mock

import requests
from django.test import SimpleTestCase, override_settings

from apps.payments import razorpay_service
from apps.payments.razorpay_service import RazorpayError, RazorpayNotConfigured

LIVE_SETTINGS = {
    "RAZORPAY_TEST_MODE": False,
    "RAZORPAY_KEY_ID": "rzp_live_key",
    "RAZORPAY_KEY_SECRET": "live_secret",
    "RAZORPAY_API_BASE_URL": "https://api.razorpay.test/v1/",
}


def _gateway_response(payload: dict, status_code: int = 200) -> mock.Mock:
    response = mock.Mock(status_code=status_code)
    response.json.return_value = payload
    response.text = str(payload)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


class AmountConversionTests(SimpleTestCase):
    def test_rupees_are_converted_to_paise(self) -> None:
        self.assertEqual(razorpay_service.to_subunits(Decimal("1234.50")), 123450)
        self.assertEqual(razorpay_service.to_subunits(99), 9900)
        self.assertEqual(razorpay_service.to_subunits("0.015"), 2)


class EmulatedGatewayTests(SimpleTestCase):
    def test_create_order_is_emulated_in_test_mode(self) -> None:
        with mock.patch("apps.payments.razorpay_service.requests.request") as request:
            order = razorpay_service.create_order(Decimal("4500.00"), receipt="booking_1")

        request.assert_not_called()
        self.assertTrue(order["id"].startswith("order_"))
        self.assertEqual(order["amount"], 450000)
        self.assertEqual(order["currency"], "INR")
        self.assertEqual(order["receipt"], "booking_1")

    def test_transfer_is_emulated_in_test_mode(self) -> None:
        transfer = razorpay_service.transfer_to_host(Decimal("100"), "acc_HOST", booking_id=7)
        self.assertTrue(transfer["id"].startswith("trf_"))
        self.assertEqual(transfer["notes"], {"booking_id": "7"})

    def test_transfer_requires_account(self) -> None:
        with self.assertRaises(RazorpayError):
            razorpay_service.transfer_to_host(Decimal("100"), "", booking_id=7)

    def test_payment_signature_accepted_without_secret_in_test_mode(self) -> None:
        self.assertTrue(razorpay_service.verify_payment_signature("order_1", "pay_1", ""))

    def test_onboarding_link_carries_merchant(self) -> None:
        url = razorpay_service.create_onboarding_link(42)
        self.assertIn("merchant=42", url)
        self.assertIn("token=", url)


@override_settings(**LIVE_SETTINGS)
class LiveGatewayTests(SimpleTestCase):
    def test_create_order_posts_with_basic_auth(self) -> None:
        with mock.patch(
            "apps.payments.razorpay_service.requests.request",
            return_value=_gateway_response({"id": "order_LIVE1", "status": "created"}),
        ) as request:
            order = razorpay_service.create_order(Decimal("1500"), receipt="booking_9")

        self.assertEqual(order["id"], "order_LIVE1")
        args, kwargs = request.call_args
        self.assertEqual(args, ("POST", "https://api.razorpay.test/v1/orders"))
        self.assertEqual(kwargs["auth"], ("rzp_live_key", "live_secret"))
        self.assertEqual(kwargs["json"]["amount"], 150000)
        self.assertEqual(kwargs["json"]["receipt"], "booking_9")

    def test_transfer_posts_to_linked_account(self) -> None:
        with mock.patch(
            "apps.payments.razorpay_service.requests.request",
            return_value=_gateway_response({"id": "trf_LIVE1"}),
        ) as request:
            transfer = razorpay_service.transfer_to_host(Decimal("250.75"), "acc_HOST", booking_id=3)

        self.assertEqual(transfer["id"], "trf_LIVE1")
        args, kwargs = request.call_args
        self.assertEqual(args[1], "https://api.razorpay.test/v1/transfers")
        self.assertEqual(kwargs["json"]["account"], "acc_HOST")
        self.assertEqual(kwargs["json"]["amount"], 25075)

    def test_gateway_error_is_wrapped(self) -> None:
        error_body = {"error": {"code": "BAD_REQUEST_ERROR", "description": "amount too small"}}
        with mock.patch(
            "apps.payments.razorpay_service.requests.request",
            return_value=_gateway_response(error_body, status_code=400),
        ):
            with self.assertRaisesMessage(RazorpayError, "amount too small"):
                razorpay_service.create_order(Decimal("0.5"))

    def test_network_error_is_wrapped(self) -> None:
        with mock.patch(
            "apps.payments.razorpay_service.requests.request",
            side_effect=requests.exceptions.ConnectionError("connection refused"),
        ):
            with self.assertRaises(RazorpayError):
                razorpay_service.create_order(Decimal("100"))

    def test_payment_signature_is_checked(self) -> None:
        signature = hmac.new(b"live_secret", b"order_1|pay_1", hashlib.sha256).hexdigest()
        self.assertTrue(razorpay_service.verify_payment_signature("order_1", "pay_1", signature))
        self.assertFalse(razorpay_service.verify_payment_signature("order_1", "pay_2", signature))


@override_settings(RAZORPAY_TEST_MODE=False, RAZORPAY_KEY_ID="", RAZORPAY_KEY_SECRET="")
class UnconfiguredGatewayTests(SimpleTestCase):
    def test_order_requires_keys(self) -> None:
        with self.assertRaises(RazorpayNotConfigured):
            razorpay_service.create_order(Decimal("100"))

    def test_signature_check_requires_secret(self) -> None:
        with self.assertRaises(RazorpayNotConfigured):
            razorpay_service.verify_payment_signature("order_1", "pay_1", "sig")


class WebhookSignatureTests(SimpleTestCase):
    def test_accepts_everything_without_secret(self) -> None:
        self.assertTrue(razorpay_service.verify_webhook_signature(b"{}", ""))

    @override_settings(RAZORPAY_WEBHOOK_SECRET="whsec")
    def test_checks_hmac_with_secret(self) -> None:
        body = b'{"merchant": 1}'
        signature = hmac.new(b"whsec", body, hashlib.sha256).hexdigest()
        self.assertTrue(razorpay_service.verify_webhook_signature(body, signature))
        self.assertFalse(razorpay_service.verify_webhook_signature(body, "forged"))
