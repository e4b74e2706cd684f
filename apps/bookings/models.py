"""Booking models for the hotel back office."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange

from .domain.lifecycle import BookingStatus


class BookingQuerySet(models.QuerySet):
    def blocking(self):
        """Bookings that hold their room (everything except cancelled)."""
        return self.exclude(status=BookingStatus.CANCELLED)

    def overlapping(self, room, dates: DateRange):
        return self.blocking().filter(
            room=room,
            check_in__lt=dates.end_date,
            check_out__gt=dates.start_date,
        )

    def for_guest(self, guest_id):
        return self.filter(guest_id=guest_id).order_by("-check_in")

    def with_status(self, status):
        return self.filter(status=BookingStatus.parse(status))

    def checking_in_between(self, start: date, end: date):
        return self.filter(check_in__gte=start, check_in__lte=end).order_by("check_in", "room_id")


class Booking(models.Model):
    """A guest's stay in one room for a range of nights."""

    Status = BookingStatus

    guest = models.ForeignKey(
        "guests.Guest",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    check_in = models.DateField(_("Check-in"))
    check_out = models.DateField(_("Check-out"))
    number_of_guests = models.PositiveSmallIntegerField(
        _("Number of guests"),
        default=1,
        validators=[MinValueValidator(1)],
    )
    total_price = models.DecimalField(
        _("Total price"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status = models.CharField(
        _("Status"),
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.CONFIRMED,
    )
    is_paid = models.BooleanField(_("Paid"), default=False)
    payment_method = models.CharField(_("Payment method"), max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-check_in", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=Q(number_of_guests__gte=1),
                name="booking_has_guests",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "check_in", "check_out"], name="booking_room_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} room {self.room_id} {self.check_in}..{self.check_out}"

    def clean(self) -> None:
        if self.check_in is None or self.check_out is None:
            raise ValidationError(_("Check-in and check-out dates are required."))
        if self.check_in >= self.check_out:
            raise ValidationError(_("Check-out date must be after check-in date."))
        if self.number_of_guests is not None and self.number_of_guests < 1:
            raise ValidationError(_("A booking needs at least one guest."))

    def save(self, *args, **kwargs):  # type: ignore
        with transaction.atomic():
            self.clean()
            super().save(*args, **kwargs)

    @property
    def dates(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    @property
    def number_of_nights(self) -> int:
        return (self.check_out - self.check_in).days

    def is_active(self, today: date | None = None) -> bool:
        today = today or timezone.localdate()
        return self.status == BookingStatus.CHECKED_IN and self.check_in <= today < self.check_out

    def is_upcoming(self, today: date | None = None) -> bool:
        today = today or timezone.localdate()
        return self.status == BookingStatus.CONFIRMED and today < self.check_in

    def is_completed(self, today: date | None = None) -> bool:
        today = today or timezone.localdate()
        return self.status == BookingStatus.CHECKED_OUT and today >= self.check_out

    def can_check_in(self, today: date | None = None) -> bool:
        today = today or timezone.localdate()
        return self.status == BookingStatus.CONFIRMED and today >= self.check_in
