"""FilterSet definitions for the public listing search."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Property


class PropertyFilterSet(django_filters.FilterSet):
    """FilterSet for Property used by the public listing endpoint."""

    city = django_filters.CharFilter(field_name="city", lookup_expr="iexact")
    state = django_filters.CharFilter(field_name="state", lookup_expr="iexact")
    type = django_filters.ChoiceFilter(
        field_name="property_type",
        choices=Property.PropertyType.choices,
    )
    rental_type = django_filters.ChoiceFilter(
        field_name="rental_type",
        choices=Property.RentalType.choices,
    )
    price_min = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_day", lookup_expr="lte")
    guests = django_filters.NumberFilter(method="filter_guests")

    class Meta:
        model = Property
        fields = ["city", "state", "type", "rental_type"]

    def filter_guests(self, queryset, name, value):  # type: ignore
        # Listings without a cap accept any party size
        return queryset.filter(Q(max_guests__gte=value) | Q(max_guests__isnull=True))
