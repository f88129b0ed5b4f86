"""Notification services for e-mail and SMS delivery."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.models import CustomUser
    from apps.bookings.models import Booking

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    message: str,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Sends a single e-mail.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        message: Plain-text body (derived from ``html_message`` when empty)
        html_message: Optional HTML body

    Returns:
        bool: True when the message was handed to the e-mail backend
    """
    try:
        if html_message and not message:
            message = strip_tags(html_message)

        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def send_verification_codes(user: "CustomUser") -> bool:
    """Delivers the e-mail and phone verification codes issued at sign-up."""
    email_sent = send_email_notification(
        recipient_email=user.email,
        subject="Verify your TravelTrove account",
        message=(
            f"Hi {user.name},\n\n"
            f"Your e-mail verification code is {user.email_verification_code}. "
            f"It expires in {settings.VERIFICATION_CODE_TTL_HOURS} hours."
        ),
    )
    if user.phone:
        send_sms_notification(
            user.phone,
            f"Your TravelTrove verification code is {user.phone_verification_code}",
        )
    return email_sent


def send_booking_confirmation_email(booking: "Booking") -> bool:
    """Confirmation to the guest right after the booking is created."""
    property_obj = booking.property
    if booking.check_in and booking.check_out:
        period = f"{booking.check_in:%d %b %Y} - {booking.check_out:%d %b %Y}"
    else:
        period = f"{booking.duration} {booking.duration_unit}"

    html_message = f"""
    <html>
    <body>
        <h2>Hi {booking.guest.name},</h2>
        <p>Your booking at <strong>{property_obj.name}</strong> has been received.</p>
        <ul>
            <li><strong>Booking:</strong> #{booking.pk}</li>
            <li><strong>Stay:</strong> {period}</li>
            <li><strong>Guests:</strong> {booking.guests}</li>
            <li><strong>Total:</strong> {booking.total_price} {settings.PAYMENT_CURRENCY}</li>
            <li><strong>Payment:</strong> {booking.get_payment_status_display()}</li>
        </ul>
        <p>The TravelTrove team</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=booking.guest.email,
        subject=f"Booking #{booking.pk} at {property_obj.name}",
        message="",
        html_message=html_message,
    )


def send_new_booking_email_to_host(booking: "Booking") -> bool:
    host = booking.property.host
    return send_email_notification(
        recipient_email=host.email,
        subject=f"New booking for {booking.property.name}",
        message=(
            f"{booking.guest.name} ({booking.guest.phone or booking.guest.email}) booked "
            f"{booking.property.name} for {booking.guests} guest(s). "
            f"Total: {booking.total_price} {settings.PAYMENT_CURRENCY}."
        ),
    )


# ============================================================================
# SMS NOTIFICATIONS
# ============================================================================

def send_sms_notification(phone: str, message: str) -> bool:
    """
    Sends an SMS message.

    No SMS provider is wired in yet, so the message is only logged.
    """
    logger.info(f"[SMS] Would send to {phone}: {message[:50]}...")
    return True
