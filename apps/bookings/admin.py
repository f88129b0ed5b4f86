"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "guest",
        "payment_status",
        "payment_method",
        "check_in",
        "check_out",
        "duration",
        "total_price",
        "created_at",
    )
    list_filter = ("payment_status", "payment_method", "duration_unit")
    search_fields = ("property__name", "guest__email", "razorpay_order_id", "razorpay_payment_id")
    readonly_fields = (
        "total_price",
        "razorpay_order_id",
        "razorpay_payment_id",
        "razorpay_transfer_id",
        "created_at",
        "updated_at",
    )
