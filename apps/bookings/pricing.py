"""
Booking price calculation.

Daily-rate listings (hotel rooms, resorts, villas) charge per night,
houses for rent charge per month, and leases charge the lease price plus
the advance regardless of the requested duration.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from apps.properties.models import Property

from .models import Booking

CENTS = Decimal("0.01")


class PricingError(Exception):
    """Raised when a price cannot be computed for the requested stay."""


@dataclass(frozen=True)
class PriceQuote:
    total_price: Decimal
    nights: int | None = None
    months: int | None = None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"total_price": str(self.total_price)}
        if self.nights is not None:
            data["nights"] = self.nights
        if self.months is not None:
            data["months"] = self.months
        return data


def count_nights(check_in: datetime | None, check_out: datetime | None) -> int:
    """Whole days between the dates, rounded up, at least one."""
    if check_in is None or check_out is None:
        raise PricingError("Dates are required for this property type")
    if check_out < check_in:
        raise PricingError("Check-out must not be before check-in")
    delta = check_out - check_in
    nights = delta.days + (1 if delta.seconds or delta.microseconds else 0)
    return max(1, nights)


def count_months(duration: int | None, unit: str | None) -> int:
    if not duration or not unit:
        raise PricingError("Duration is required for rental properties")
    if duration < 1:
        raise PricingError("Duration must be at least 1")
    if unit == Booking.DurationUnit.YEARS:
        return duration * 12
    if unit == Booking.DurationUnit.MONTHS:
        return duration
    raise PricingError(f"Unknown duration unit: {unit}")


def _require(value: Decimal | None, label: str) -> Decimal:
    if value is None or value <= 0:
        raise PricingError(f"{label} is not set for this property")
    return Decimal(value)


def quote(
    property_obj: Property,
    *,
    check_in: datetime | None = None,
    check_out: datetime | None = None,
    duration: int | None = None,
    duration_unit: str | None = None,
) -> PriceQuote:
    """Computes the total price for a stay at ``property_obj``."""
    if property_obj.uses_daily_rate:
        nights = count_nights(check_in, check_out)
        rate = _require(property_obj.price_per_day, "Price per day")
        return PriceQuote(total_price=(rate * nights).quantize(CENTS), nights=nights)

    if property_obj.property_type != Property.PropertyType.HOUSE_FOR_RENT:
        raise PricingError(f"Unsupported property type: {property_obj.property_type}")

    if property_obj.rental_type == Property.RentalType.LEASE:
        lease_price = _require(property_obj.lease_price, "Lease price")
        advance = _require(property_obj.advance_amount, "Advance amount")
        return PriceQuote(total_price=(lease_price + advance).quantize(CENTS))

    if property_obj.rental_type == Property.RentalType.RENT:
        months = count_months(duration, duration_unit)
        monthly_price = _require(property_obj.monthly_price, "Monthly price")
        return PriceQuote(total_price=(monthly_price * months).quantize(CENTS), months=months)

    raise PricingError("Rental type is not set for this property")
