"""API views for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db.models import Q  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingRequestSerializer,
    BookingSerializer,
    BookingVerifySerializer,
)
from .services import confirm_payment


def _checkout_order(order: dict | None) -> dict | None:
    """Fields the checkout widget needs to collect the payment."""
    if not order:
        return None
    return {
        "id": order["id"],
        "amount": order["amount"],
        "currency": order["currency"],
        "key_id": settings.RAZORPAY_KEY_ID,
    }


class BookingViewSet(mixins.CreateModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Bookings for guests (create, pay, list) and hosts (incoming bookings)."""

    queryset = Booking.objects.select_related("property", "property__host", "guest")
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        return super().get_queryset().filter(Q(guest=user) | Q(property__host=user))

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "quote":
            return BookingRequestSerializer
        if self.action == "verify":
            return BookingVerifySerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        return Response(
            {
                "status": "success",
                "booking": BookingSerializer(booking).data,
                "order": _checkout_order(serializer.order),
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        return Response({"booking": BookingSerializer(self.get_object()).data})

    @action(detail=False, methods=["post"], permission_classes=[permissions.AllowAny])
    def quote(self, request):  # type: ignore
        """Prices a stay without creating a booking."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(serializer.validated_data["price"].as_dict())

    @action(detail=False, methods=["post"])
    def verify(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = confirm_payment(
            serializer.validated_data["booking"],
            payment_id=serializer.validated_data["razorpay_payment_id"],
            order_id=serializer.validated_data["razorpay_order_id"],
        )
        return Response(
            {"message": "Payment verified and booking updated", "booking": BookingSerializer(booking).data}
        )

    @action(detail=False, methods=["get"])
    def my(self, request):  # type: ignore
        bookings = self.get_queryset().filter(guest=request.user)
        return Response({"bookings": BookingSerializer(bookings, many=True).data})

    @action(detail=False, methods=["get"], url_path="host/bookings", url_name="host-bookings")
    def host_bookings(self, request):  # type: ignore
        """Bookings on the caller's listings, newest first."""
        bookings = self.get_queryset().filter(property__host=request.user).order_by("-created_at")
        return Response({"bookings": BookingSerializer(bookings, many=True).data})
