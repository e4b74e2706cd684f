"""Room inventory models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models, transaction  # type: ignore
from django.db.models import Exists, OuterRef, Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.choices import parse_choice
from shared.infrastructure.fields import CommaSeparatedListField


class RoomQuerySet(models.QuerySet):
    def of_type(self, room_type):
        return self.filter(room_type=parse_choice(Room.RoomType, room_type))

    def with_status(self, status):
        return self.filter(status=parse_choice(Room.Status, status))

    def in_price_range(self, min_price, max_price):
        """Rooms priced within both bounds (inclusive), cheapest first."""
        low, high = Decimal(str(min_price)), Decimal(str(max_price))
        if low > high:
            low, high = high, low
        return self.filter(
            price_per_night__gte=low,
            price_per_night__lte=high,
        ).order_by("price_per_night", "room_number")

    def available_for(self, check_in: date | None, check_out: date | None):
        """Rooms with no blocking booking that overlaps ``[check_in, check_out)``."""
        if check_in is None or check_out is None or check_out <= check_in:
            return self.none()

        from apps.bookings.models import Booking  # Local import to prevent circular dependency

        clashing = Booking.objects.blocking().filter(
            room=OuterRef("pk"),
            check_in__lt=check_out,
            check_out__gt=check_in,
        )
        return self.filter(~Exists(clashing))

    def set_availability(self, room_number, available: bool) -> int:
        return self.filter(pk=room_number).update(is_available=available)


class Room(models.Model):
    """A bookable hotel room, identified by its door number."""

    class RoomType(models.TextChoices):
        SINGLE = "single", _("Single")
        DOUBLE = "double", _("Double")
        DELUXE = "deluxe", _("Deluxe")
        SUITE = "suite", _("Suite")

    class Status(models.TextChoices):
        CLEAN = "clean", _("Clean")
        DIRTY = "dirty", _("Dirty")
        MAINTENANCE = "maintenance", _("Maintenance")
        OCCUPIED = "occupied", _("Occupied")

    room_number = models.PositiveIntegerField(
        _("Room number"),
        primary_key=True,
        validators=[MinValueValidator(1)],
    )
    room_type = models.CharField(
        _("Room type"),
        max_length=20,
        choices=RoomType.choices,
        default=RoomType.SINGLE,
    )
    price_per_night = models.DecimalField(
        _("Price per night"),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    max_occupancy = models.PositiveSmallIntegerField(
        _("Max occupancy"),
        default=1,
        validators=[MinValueValidator(1)],
    )
    has_balcony = models.BooleanField(_("Balcony"), default=False)
    amenities = CommaSeparatedListField(_("Amenities"))
    is_available = models.BooleanField(_("Available"), default=True)
    status = models.CharField(
        _("Housekeeping status"),
        max_length=20,
        choices=Status.choices,
        default=Status.CLEAN,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RoomQuerySet.as_manager()

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["room_number"]
        constraints = [
            models.CheckConstraint(
                condition=Q(room_number__gte=1),
                name="room_number_positive",
            ),
            models.CheckConstraint(
                condition=Q(price_per_night__gte=0),
                name="room_price_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(max_occupancy__gte=1),
                name="room_occupancy_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["room_type", "price_per_night"], name="room_type_price_idx"),
        ]

    def __str__(self) -> str:
        return f"Room {self.room_number} ({self.get_room_type_display()})"

    def save(self, *args, **kwargs):  # type: ignore
        with transaction.atomic():
            self.amenities = Room._meta.get_field("amenities").to_python(self.amenities)
            super().save(*args, **kwargs)

    def can_accommodate(self, guests: int) -> bool:
        return guests <= self.max_occupancy

    def calculate_price_for_stay(self, nights: int) -> Decimal:
        if nights < 0:
            raise ValueError("Number of nights cannot be negative.")
        return Decimal(str(self.price_per_night)) * nights

    def add_amenity(self, item: str) -> list[str]:
        item = (item or "").strip()
        if "," in item:
            raise ValueError("Amenity names cannot contain commas.")
        if item and item not in self.amenities:
            self.amenities = [*self.amenities, item]
            self.save(update_fields=["amenities", "updated_at"])
        return self.amenities
