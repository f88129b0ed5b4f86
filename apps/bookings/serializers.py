"""Serializers for the booking domain."""

from __future__ import annotations

import logging

from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.settings import ISO_8601  # type: ignore

from apps.payments import razorpay_service
from apps.payments.razorpay_service import RazorpayNotConfigured
from apps.properties.models import Property
from apps.properties.serializers import PropertySummarySerializer
from apps.users.serializers import UserSummarySerializer

from .models import Booking
from .pricing import PricingError, quote
from .services import open_booking

logger = logging.getLogger(__name__)

DATE_INPUT_FORMATS = [ISO_8601, "%Y-%m-%d"]


class BookingRequestSerializer(serializers.Serializer):
    """Stay parameters shared by price quotes and booking creation."""

    property = serializers.IntegerField()
    check_in = serializers.DateTimeField(
        required=False, allow_null=True, input_formats=DATE_INPUT_FORMATS
    )
    check_out = serializers.DateTimeField(
        required=False, allow_null=True, input_formats=DATE_INPUT_FORMATS
    )
    duration = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    duration_unit = serializers.ChoiceField(
        choices=Booking.DurationUnit.choices,
        required=False,
        allow_blank=True,
    )

    def validate_property(self, value: int) -> Property:
        property_obj = Property.objects.select_related("host").filter(pk=value).first()
        if property_obj is None:
            raise NotFound("Property not found")
        return property_obj

    def validate(self, attrs):  # type: ignore
        try:
            attrs["price"] = quote(
                attrs["property"],
                check_in=attrs.get("check_in"),
                check_out=attrs.get("check_out"),
                duration=attrs.get("duration"),
                duration_unit=attrs.get("duration_unit"),
            )
        except PricingError as e:
            raise serializers.ValidationError(str(e))
        return attrs


class BookingCreateSerializer(BookingRequestSerializer):
    """
    Booking request from a guest.

    The total is always computed server-side; any total sent by the client
    is ignored.
    """

    guests = serializers.IntegerField(min_value=1, default=1)
    payment_method = serializers.ChoiceField(
        choices=Booking.PaymentMethod.choices,
        default=Booking.PaymentMethod.RAZORPAY,
    )

    def validate(self, attrs):  # type: ignore
        property_obj: Property = attrs["property"]
        if not property_obj.is_bookable:
            raise serializers.ValidationError("Property is not available for booking")
        if property_obj.property_type == Property.PropertyType.HOUSE_FOR_RENT and not (
            attrs.get("duration") and attrs.get("duration_unit")
        ):
            raise serializers.ValidationError("Duration is required for rental properties")
        if property_obj.max_guests and attrs["guests"] > property_obj.max_guests:
            raise serializers.ValidationError(
                {"guests": f"This property accepts at most {property_obj.max_guests} guests"}
            )
        return super().validate(attrs)

    def create(self, validated_data):  # type: ignore
        property_obj: Property = validated_data["property"]
        if not property_obj.uses_daily_rate:
            validated_data["check_in"] = validated_data["check_out"] = None
        booking, order = open_booking(
            guest=self.context["request"].user,
            property_obj=property_obj,
            price=validated_data["price"],
            payment_method=validated_data["payment_method"],
            guests=validated_data["guests"],
            check_in=validated_data.get("check_in"),
            check_out=validated_data.get("check_out"),
            duration=validated_data.get("duration"),
            duration_unit=validated_data.get("duration_unit", ""),
        )
        self.order = order
        return booking


class BookingVerifySerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    razorpay_payment_id = serializers.CharField(max_length=64)
    razorpay_order_id = serializers.CharField(max_length=64)
    razorpay_signature = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):  # type: ignore
        booking = (
            Booking.objects.select_related("property__host")
            .filter(pk=attrs["booking_id"], guest=self.context["request"].user)
            .first()
        )
        if booking is None:
            raise NotFound("Booking not found")
        if booking.is_paid():
            raise serializers.ValidationError("Payment already verified")
        if booking.razorpay_order_id and booking.razorpay_order_id != attrs["razorpay_order_id"]:
            raise serializers.ValidationError("Order does not match this booking")

        try:
            valid = razorpay_service.verify_payment_signature(
                attrs["razorpay_order_id"],
                attrs["razorpay_payment_id"],
                attrs.get("razorpay_signature", ""),
            )
        except RazorpayNotConfigured:
            logger.warning(f"Payment for booking {booking.pk} accepted without signature check")
            valid = True
        if not valid:
            raise serializers.ValidationError("Invalid payment signature")

        attrs["booking"] = booking
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    """Booking with the listing card and the guest's contact details."""

    property = PropertySummarySerializer(read_only=True)
    guest = UserSummarySerializer(read_only=True)
    payment_status_display = serializers.ReadOnlyField(source="get_payment_status_display")

    class Meta:
        model = Booking
        fields = [
            "id",
            "property",
            "guest",
            "check_in",
            "check_out",
            "duration",
            "duration_unit",
            "guests",
            "total_price",
            "payment_status",
            "payment_status_display",
            "payment_method",
            "razorpay_order_id",
            "razorpay_payment_id",
            "razorpay_transfer_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
