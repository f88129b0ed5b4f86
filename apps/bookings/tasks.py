"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.payments import razorpay_service
from apps.payments.razorpay_service import RazorpayError

from .models import Booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.transfer_to_host")
def transfer_to_host(booking_id: int) -> str | None:
    """
    Routes a paid booking's total to the host's linked account.

    Best effort: gateway failures are logged and the booking stays paid.

    Returns:
        str | None: Transfer id, or None when nothing was transferred
    """
    booking = Booking.objects.select_related("property__host").filter(pk=booking_id).first()
    if booking is None:
        logger.warning(f"Payout skipped: booking {booking_id} no longer exists")
        return None

    if booking.razorpay_transfer_id:
        return booking.razorpay_transfer_id

    host = booking.property.host
    if not host.payment_account_id:
        logger.info(f"Payout skipped for booking {booking_id}: host {host.pk} has no payment account")
        return None

    try:
        transfer = razorpay_service.transfer_to_host(
            amount=booking.total_price,
            host_account_id=host.payment_account_id,
            booking_id=booking.pk,
        )
    except RazorpayError as e:
        logger.warning(f"Transfer to host failed for booking {booking_id}: {e}")
        return None

    booking.record_transfer(transfer["id"])
    logger.info(f"Payout {transfer['id']} sent for booking {booking_id}")
    return transfer["id"]
