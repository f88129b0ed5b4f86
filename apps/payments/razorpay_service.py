"""
Razorpay payment gateway integration.

Orders, direct transfers to hosts' linked accounts and signature checks go
through the Razorpay REST API. With ``RAZORPAY_TEST_MODE`` enabled the
gateway is emulated in-process so the whole booking flow works without
real keys.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import time
import uuid
from decimal import ROUND_HALF_UP, Decimal

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class RazorpayError(Exception):
    """Raised when the gateway rejects a call or cannot be reached."""


class RazorpayNotConfigured(RazorpayError):
    """Raised when neither API keys nor test mode are configured."""


def to_subunits(amount) -> int:
    """Converts rupees to paise, the unit Razorpay expects."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _emulated() -> bool:
    return bool(settings.RAZORPAY_TEST_MODE)


def _credentials() -> tuple[str, str]:
    key_id = settings.RAZORPAY_KEY_ID
    key_secret = settings.RAZORPAY_KEY_SECRET
    if not key_id or not key_secret:
        raise RazorpayNotConfigured(
            "Razorpay is not configured. Set RAZORPAY_TEST_MODE=true or add "
            "RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET."
        )
    return key_id, key_secret


def _error_description(response) -> str:
    try:
        return response.json().get("error", {}).get("description") or response.text
    except ValueError:
        return response.text


def _request(method: str, path: str, payload: dict) -> dict:
    auth = _credentials()
    url = f"{settings.RAZORPAY_API_BASE_URL.rstrip('/')}/{path}"
    try:
        response = requests.request(
            method,
            url,
            json=payload,
            auth=auth,
            timeout=settings.RAZORPAY_TIMEOUT,
        )
        response.raise_for_status()
        return response.json()
    except requests.exceptions.HTTPError as e:
        description = _error_description(e.response)
        logger.error(f"Razorpay API returned an error for {path}: {description}")
        raise RazorpayError(f"Razorpay error: {description}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error while calling Razorpay {path}: {e}")
        raise RazorpayError(f"Could not reach Razorpay: {e}") from e
    except ValueError as e:
        logger.error(f"Razorpay returned a non-JSON response for {path}")
        raise RazorpayError("Razorpay returned an invalid response") from e


def create_order(amount, currency: str | None = None, receipt: str | None = None) -> dict:
    """
    Creates a payment order the guest then pays on the checkout page.

    Args:
        amount: Amount in rupees
        currency: ISO currency code (defaults to ``PAYMENT_CURRENCY``)
        receipt: Merchant receipt reference

    Returns:
        dict: Razorpay order entity (``id`` is the order id)
    """
    currency = currency or settings.PAYMENT_CURRENCY
    payload = {
        "amount": to_subunits(amount),
        "currency": currency,
        "receipt": receipt or f"rcpt_{int(time.time() * 1000)}",
    }
    logger.info(f"Creating Razorpay order for {amount} {currency} (receipt {payload['receipt']})")

    if _emulated():
        order = {
            "id": f"order_{uuid.uuid4().hex[:16]}",
            "entity": "order",
            "amount": payload["amount"],
            "amount_paid": 0,
            "amount_due": payload["amount"],
            "currency": currency,
            "receipt": payload["receipt"],
            "offer_id": None,
            "status": "created",
            "attempts": 0,
            "notes": {},
            "created_at": int(time.time()),
        }
        logger.warning(f"Razorpay test mode: emulated order {order['id']}")
        return order

    order = _request("POST", "orders", payload)
    logger.info(f"Razorpay order created: {order.get('id')}")
    return order


def transfer_to_host(
    amount,
    host_account_id: str,
    booking_id: int,
    currency: str | None = None,
) -> dict:
    """
    Transfers funds to a host's Razorpay linked account (Route).

    Requires the host to have completed onboarding; the platform account
    must have Route enabled.
    """
    if not host_account_id:
        raise RazorpayError("No host account id provided")

    currency = currency or settings.PAYMENT_CURRENCY
    payload = {
        "account": host_account_id,
        "amount": to_subunits(amount),
        "currency": currency,
        "notes": {"booking_id": str(booking_id)},
    }
    logger.info(f"Transferring {amount} {currency} to {host_account_id} for booking {booking_id}")

    if _emulated():
        transfer = {
            "id": f"trf_{uuid.uuid4().hex[:16]}",
            "entity": "transfer",
            "source": "api",
            "account": host_account_id,
            "amount": payload["amount"],
            "currency": currency,
            "notes": payload["notes"],
            "status": "processed",
            "created_at": int(time.time()),
        }
        logger.warning(f"Razorpay test mode: emulated transfer {transfer['id']}")
        return transfer

    transfer = _request("POST", "transfers", payload)
    logger.info(f"Razorpay transfer created: {transfer.get('id')}")
    return transfer


def _hmac_sha256(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str) -> bool:
    """Checks the checkout signature ``HMAC_SHA256(order_id|payment_id, key_secret)``."""
    key_secret = settings.RAZORPAY_KEY_SECRET
    if key_secret:
        expected = _hmac_sha256(key_secret, f"{order_id}|{payment_id}".encode("utf-8"))
        return hmac.compare_digest(expected, signature or "")
    if _emulated():
        logger.warning(f"Razorpay test mode: accepted payment {payment_id} without signature check")
        return True
    raise RazorpayNotConfigured("RAZORPAY_KEY_SECRET is required to verify payments")


def verify_webhook_signature(body: bytes, signature: str) -> bool:
    """
    Checks the ``X-Razorpay-Signature`` header of a webhook call.

    Without ``RAZORPAY_WEBHOOK_SECRET`` every call is accepted; configure the
    secret in production.
    """
    webhook_secret = settings.RAZORPAY_WEBHOOK_SECRET
    if not webhook_secret:
        logger.warning("RAZORPAY_WEBHOOK_SECRET is not set; webhook signature not checked")
        return True
    return hmac.compare_digest(_hmac_sha256(webhook_secret, body), signature or "")


def create_onboarding_link(user_id: int) -> str:
    """
    Returns the URL where a host completes KYC for a linked account.

    Once onboarding finishes Razorpay (or the host) reports the account id
    back through the onboarding webhook or the payment-account endpoint.
    """
    token = secrets.token_hex(8)
    url = f"{settings.RAZORPAY_ONBOARDING_URL}?merchant={user_id}&token={token}"
    logger.info(f"Issued Razorpay onboarding link for user {user_id}")
    return url
