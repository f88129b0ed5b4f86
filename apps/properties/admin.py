"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "property_type",
        "city",
        "state",
        "price_per_day",
        "monthly_price",
        "available",
        "is_complete",
        "host",
    )
    list_filter = ("property_type", "rental_type", "available", "city")
    search_fields = ("name", "city", "state", "address", "host__email")
    readonly_fields = (
        "basic_info_complete",
        "images_complete",
        "pricing_complete",
        "payment_account_linked",
        "created_at",
        "updated_at",
    )

    @admin.display(boolean=True)
    def is_complete(self, obj: Property) -> bool:
        return obj.is_complete
