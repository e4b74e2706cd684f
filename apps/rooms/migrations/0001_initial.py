from decimal import Decimal

import django.core.validators
from django.db import migrations, models

import shared.infrastructure.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                (
                    "room_number",
                    models.PositiveIntegerField(
                        primary_key=True,
                        serialize=False,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Room number",
                    ),
                ),
                (
                    "room_type",
                    models.CharField(
                        choices=[("single", "Single"), ("double", "Double"), ("deluxe", "Deluxe"), ("suite", "Suite")],
                        default="single",
                        max_length=20,
                        verbose_name="Room type",
                    ),
                ),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                        verbose_name="Price per night",
                    ),
                ),
                (
                    "max_occupancy",
                    models.PositiveSmallIntegerField(
                        default=1,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="Max occupancy",
                    ),
                ),
                ("has_balcony", models.BooleanField(default=False, verbose_name="Balcony")),
                (
                    "amenities",
                    shared.infrastructure.fields.CommaSeparatedListField(
                        blank=True, default=list, verbose_name="Amenities"
                    ),
                ),
                ("is_available", models.BooleanField(default=True, verbose_name="Available")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("clean", "Clean"),
                            ("dirty", "Dirty"),
                            ("maintenance", "Maintenance"),
                            ("occupied", "Occupied"),
                        ],
                        default="clean",
                        max_length=20,
                        verbose_name="Housekeeping status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Room",
                "verbose_name_plural": "Rooms",
                "ordering": ["room_number"],
                "indexes": [models.Index(fields=["room_type", "price_per_night"], name="room_type_price_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("room_number__gte", 1)), name="room_number_positive"),
                    models.CheckConstraint(condition=models.Q(("price_per_night__gte", 0)), name="room_price_non_negative"),
                    models.CheckConstraint(condition=models.Q(("max_occupancy__gte", 1)), name="room_occupancy_positive"),
                ],
            },
        ),
    ]
