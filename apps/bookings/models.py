"""Booking models for TravelTrove."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """A guest's reservation of a listing, by dates or by rental duration."""

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        PAY_ON_LOCATION = "pay_on_location", _("Pay on Location")

    class PaymentMethod(models.TextChoices):
        RAZORPAY = "razorpay", _("Razorpay")
        PAY_ON_LOCATION = "pay_on_location", _("Pay on Location")

    class DurationUnit(models.TextChoices):
        MONTHS = "months", _("Months")
        YEARS = "years", _("Years")

    guest = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    check_in = models.DateTimeField(null=True, blank=True)
    check_out = models.DateTimeField(null=True, blank=True)
    duration = models.PositiveSmallIntegerField(null=True, blank=True)
    duration_unit = models.CharField(max_length=10, choices=DurationUnit.choices, blank=True)
    guests = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.RAZORPAY,
    )
    razorpay_order_id = models.CharField(max_length=64, blank=True)
    razorpay_payment_id = models.CharField(max_length=64, blank=True)
    razorpay_transfer_id = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["guest", "created_at"], name="booking_guest_created_idx"),
            models.Index(fields=["property", "created_at"], name="booking_property_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} ({self.property_id})"

    def is_paid(self) -> bool:
        return self.payment_status == self.PaymentStatus.PAID

    def mark_paid(self, payment_id: str, order_id: str) -> None:
        self.payment_status = self.PaymentStatus.PAID
        self.payment_method = self.PaymentMethod.RAZORPAY
        self.razorpay_payment_id = payment_id
        self.razorpay_order_id = order_id
        self.save(
            update_fields=[
                "payment_status",
                "payment_method",
                "razorpay_payment_id",
                "razorpay_order_id",
                "updated_at",
            ]
        )

    def record_transfer(self, transfer_id: str) -> None:
        self.razorpay_transfer_id = transfer_id
        self.save(update_fields=["razorpay_transfer_id", "updated_at"])
