import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                (
                    "property_type",
                    models.CharField(
                        choices=[
                            ("hotel_room", "Hotel Room"),
                            ("resort", "Resort"),
                            ("villa", "Villa"),
                            ("house_for_rent", "House for Rent"),
                        ],
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("state", models.CharField(blank=True, max_length=100)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("address", models.CharField(blank=True, max_length=255)),
                ("gps_url", models.URLField(blank=True, max_length=500, verbose_name="Map link")),
                ("opening_time", models.TimeField(blank=True, null=True)),
                ("closing_time", models.TimeField(blank=True, null=True)),
                (
                    "price_per_day",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "rental_type",
                    models.CharField(
                        blank=True,
                        choices=[("rent", "Rent"), ("lease", "Lease")],
                        max_length=10,
                    ),
                ),
                (
                    "monthly_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "lease_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "advance_amount",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=12,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "lease_time_limit",
                    models.PositiveSmallIntegerField(blank=True, help_text="Lease term in months.", null=True),
                ),
                ("max_guests", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("bedrooms", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("facilities", models.JSONField(blank=True, default=list)),
                ("images", models.JSONField(blank=True, default=list, help_text="Public image URLs.")),
                ("available", models.BooleanField(default=True)),
                ("basic_info_complete", models.BooleanField(default=False)),
                ("images_complete", models.BooleanField(default=False)),
                ("pricing_complete", models.BooleanField(default=False)),
                ("payment_account_linked", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "host",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="properties",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Property",
                "verbose_name_plural": "Properties",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["city", "property_type"], name="property_city_type_idx"),
                    models.Index(fields=["host", "created_at"], name="property_host_created_idx"),
                ],
            },
        ),
    ]
