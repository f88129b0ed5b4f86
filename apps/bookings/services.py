"""Domain services for booking workflows."""

from __future__ import annotations

import logging

from apps.notifications.services import (
    send_booking_confirmation_email,
    send_new_booking_email_to_host,
)
from apps.payments import razorpay_service
from apps.payments.razorpay_service import RazorpayError

from .models import Booking
from .pricing import PriceQuote
from .tasks import transfer_to_host

logger = logging.getLogger(__name__)


def open_booking(
    *,
    guest,
    property_obj,
    price: PriceQuote,
    payment_method: str,
    guests: int = 1,
    check_in=None,
    check_out=None,
    duration: int | None = None,
    duration_unit: str = "",
) -> tuple[Booking, dict | None]:
    """
    Creates a booking and, for online payment, a gateway order.

    If the gateway cannot create the order the booking falls back to
    payment on location instead of failing.

    Returns:
        tuple: (booking, order) where order is None for offline payment
    """
    booking = Booking.objects.create(
        guest=guest,
        property=property_obj,
        check_in=check_in,
        check_out=check_out,
        duration=duration,
        duration_unit=duration_unit or "",
        guests=guests,
        total_price=price.total_price,
        payment_status=Booking.PaymentStatus.PAY_ON_LOCATION,
        payment_method=Booking.PaymentMethod.PAY_ON_LOCATION,
    )

    order = None
    if payment_method == Booking.PaymentMethod.RAZORPAY:
        try:
            order = razorpay_service.create_order(price.total_price, receipt=f"booking_{booking.pk}")
        except RazorpayError as e:
            logger.warning(
                f"Razorpay order creation failed for booking {booking.pk}, "
                f"falling back to pay on location: {e}"
            )

    if order:
        booking.payment_status = Booking.PaymentStatus.PENDING
        booking.payment_method = Booking.PaymentMethod.RAZORPAY
        booking.razorpay_order_id = order["id"]
        booking.save(update_fields=["payment_status", "payment_method", "razorpay_order_id", "updated_at"])

    logger.info(
        f"Booking {booking.pk} created for property {property_obj.pk}: "
        f"{booking.total_price} ({booking.payment_status})"
    )
    send_booking_confirmation_email(booking)
    send_new_booking_email_to_host(booking)
    return booking, order


def schedule_host_payout(booking: Booking) -> bool:
    """Queues the payout of a paid booking to its host; never raises."""
    if not booking.property.host.payment_account_id:
        logger.info(f"No payout for booking {booking.pk}: host has no payment account")
        return False

    try:
        transfer_to_host.delay(booking.pk)
    except Exception as e:  # noqa: BLE001
        logger.warning(f"Could not queue payout for booking {booking.pk}: {e}")
        return False
    return True


def confirm_payment(booking: Booking, *, payment_id: str, order_id: str) -> Booking:
    booking.mark_paid(payment_id=payment_id, order_id=order_id)
    logger.info(f"Payment {payment_id} verified for booking {booking.pk}")
    schedule_host_payout(booking)
    booking.refresh_from_db()
    return booking
