"""Property domain models for TravelTrove.

A listing is priced either per day (hotel rooms, resorts, villas) or, for
houses for rent, per month or as a lease. Each listing carries a completion
checklist that is recomputed on save; only complete and available listings
are bookable.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

MIN_LISTING_IMAGES = 5

COMPLETION_FIELDS = [
    "basic_info_complete",
    "images_complete",
    "pricing_complete",
    "payment_account_linked",
]


def _positive(value) -> bool:
    return value is not None and value > 0


class PropertyQuerySet(models.QuerySet):
    def bookable(self) -> "PropertyQuerySet":
        return self.filter(
            available=True,
            basic_info_complete=True,
            images_complete=True,
            pricing_complete=True,
        )

    def owned_by(self, user) -> "PropertyQuerySet":
        return self.filter(host=user)


class Property(models.Model):
    """Listing published by a host."""

    class PropertyType(models.TextChoices):
        HOTEL_ROOM = "hotel_room", _("Hotel Room")
        RESORT = "resort", _("Resort")
        VILLA = "villa", _("Villa")
        HOUSE_FOR_RENT = "house_for_rent", _("House for Rent")

    class RentalType(models.TextChoices):
        RENT = "rent", _("Rent")
        LEASE = "lease", _("Lease")

    DAILY_RATE_TYPES = frozenset(
        {PropertyType.HOTEL_ROOM, PropertyType.RESORT, PropertyType.VILLA}
    )

    host = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    name = models.CharField(_("Name"), max_length=255)
    property_type = models.CharField(_("Type"), max_length=20, choices=PropertyType.choices)

    state = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)
    gps_url = models.URLField(_("Map link"), max_length=500, blank=True)
    opening_time = models.TimeField(null=True, blank=True)
    closing_time = models.TimeField(null=True, blank=True)

    price_per_day = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    rental_type = models.CharField(max_length=10, choices=RentalType.choices, blank=True)
    monthly_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    lease_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    advance_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    lease_time_limit = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        help_text=_("Lease term in months."),
    )

    max_guests = models.PositiveSmallIntegerField(null=True, blank=True)
    bedrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    facilities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True, help_text=_("Public image URLs."))
    available = models.BooleanField(default=True)

    basic_info_complete = models.BooleanField(default=False)
    images_complete = models.BooleanField(default=False)
    pricing_complete = models.BooleanField(default=False)
    payment_account_linked = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PropertyQuerySet.as_manager()

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["city", "property_type"], name="property_city_type_idx"),
            models.Index(fields=["host", "created_at"], name="property_host_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    # --- Pricing model ------------------------------------------------------
    @property
    def uses_daily_rate(self) -> bool:
        return self.property_type in self.DAILY_RATE_TYPES

    @property
    def is_lease(self) -> bool:
        return (
            self.property_type == self.PropertyType.HOUSE_FOR_RENT
            and self.rental_type == self.RentalType.LEASE
        )

    # --- Completion checklist -----------------------------------------------
    def _basic_info_ready(self) -> bool:
        return all([self.name, self.property_type, self.state, self.city, self.address])

    def _pricing_ready(self) -> bool:
        if self.uses_daily_rate:
            return _positive(self.price_per_day)
        if self.property_type != self.PropertyType.HOUSE_FOR_RENT:
            return False
        if self.rental_type == self.RentalType.RENT:
            return _positive(self.monthly_price)
        if self.rental_type == self.RentalType.LEASE:
            return (
                _positive(self.lease_price)
                and _positive(self.advance_amount)
                and _positive(self.lease_time_limit)
            )
        return False

    def compute_completion(self) -> dict[str, bool]:
        return {
            "basic_info_complete": self._basic_info_ready(),
            "images_complete": len(self.images or []) >= MIN_LISTING_IMAGES,
            "pricing_complete": self._pricing_ready(),
            "payment_account_linked": bool(self.host_id and self.host.payment_account_id),
        }

    def apply_completion(self) -> bool:
        """Sets the completion flags in memory and reports whether any changed."""
        changed = False
        for field, value in self.compute_completion().items():
            if getattr(self, field) != value:
                setattr(self, field, value)
                changed = True
        return changed

    def refresh_completion(self) -> None:
        """Recomputes the flags and persists them when they drifted."""
        if self.apply_completion() and self.pk:
            self.save(update_fields=COMPLETION_FIELDS)

    @property
    def completion_status(self) -> dict[str, bool]:
        return {
            "basic_info": self.basic_info_complete,
            "images": self.images_complete,
            "pricing": self.pricing_complete,
            "payment_account_linked": self.payment_account_linked,
        }

    @property
    def is_complete(self) -> bool:
        return self.basic_info_complete and self.images_complete and self.pricing_complete

    @property
    def is_bookable(self) -> bool:
        return self.available and self.is_complete

    def save(self, *args, **kwargs):  # type: ignore
        self.apply_completion()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | set(COMPLETION_FIELDS)
        super().save(*args, **kwargs)
