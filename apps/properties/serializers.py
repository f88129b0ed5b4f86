"""Serializers for the properties domain."""

from __future__ import annotations

import logging

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer
from shared.api.exceptions import ServiceUnavailable

from . import media
from .models import Property

logger = logging.getLogger(__name__)

MAX_UPLOAD_FILES = 10

PROPERTY_FIELDS = [
    "name",
    "property_type",
    "state",
    "city",
    "address",
    "gps_url",
    "opening_time",
    "closing_time",
    "price_per_day",
    "rental_type",
    "monthly_price",
    "lease_price",
    "advance_amount",
    "lease_time_limit",
    "max_guests",
    "bedrooms",
    "facilities",
    "images",
    "available",
]


class PropertySerializer(serializers.ModelSerializer):
    """Listing as returned to clients, with the host's contact card."""

    host = UserSummarySerializer(read_only=True)
    property_type_display = serializers.ReadOnlyField(source="get_property_type_display")
    completion_status = serializers.ReadOnlyField()
    is_complete = serializers.ReadOnlyField()
    is_bookable = serializers.ReadOnlyField()

    class Meta:
        model = Property
        fields = [
            "id",
            "host",
            *PROPERTY_FIELDS,
            "property_type_display",
            "completion_status",
            "is_complete",
            "is_bookable",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertySummarySerializer(serializers.ModelSerializer):
    """Short listing card embedded in bookings."""

    class Meta:
        model = Property
        fields = ["id", "name", "property_type", "state", "city", "address", "images"]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    """
    Create/update payload for listings.

    Accepts JSON (``images`` as a list of URLs) or multipart form data where
    ``image_files`` are uploaded to the media host and appended to the
    listing's images.
    """

    facilities = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
    )
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    # Form posts omit unchecked boxes; a new listing starts available
    available = serializers.BooleanField(required=False, default=True)
    image_files = serializers.ListField(
        child=serializers.ImageField(),
        required=False,
        write_only=True,
        max_length=MAX_UPLOAD_FILES,
    )

    class Meta:
        model = Property
        fields = [*PROPERTY_FIELDS, "image_files"]

    def validate(self, attrs):  # type: ignore
        property_type = attrs.get("property_type", getattr(self.instance, "property_type", None))
        if attrs.get("rental_type") and property_type != Property.PropertyType.HOUSE_FOR_RENT:
            raise serializers.ValidationError(
                {"rental_type": "Rental type applies to houses for rent only"}
            )
        return attrs

    def _upload(self, files) -> list[str]:
        if not files:
            return []
        try:
            return media.upload_images(files)
        except media.MediaUploadError as e:
            logger.warning(f"Listing image upload failed: {e}")
            raise ServiceUnavailable("Image upload failed") from e

    def create(self, validated_data):  # type: ignore
        uploaded = self._upload(validated_data.pop("image_files", None))
        validated_data["images"] = list(validated_data.get("images", [])) + uploaded

        host = self.context["request"].user
        property_obj = Property.objects.create(host=host, **validated_data)
        host.mark_host()
        logger.info(f"Property {property_obj.pk} created by user {host.pk}")
        return property_obj

    def update(self, instance: Property, validated_data):  # type: ignore
        uploaded = self._upload(validated_data.pop("image_files", None))
        if uploaded:
            images = validated_data.get("images", instance.images or [])
            validated_data["images"] = list(images) + uploaded
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance
