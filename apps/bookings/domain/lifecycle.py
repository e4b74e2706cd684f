"""
Booking Lifecycle

Status machine and pricing rules for a room booking. Nothing here touches
the database, so the rules can be checked in plain unit tests and reused
by the services, the admin actions and the Excel importer.

State transitions:
- CONFIRMED -> CHECKED_IN (guest arrived, not before the check-in date)
- CONFIRMED -> CANCELLED
- CHECKED_IN -> CHECKED_OUT
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.base import HotelError
from shared.domain.choices import parse_choice
from shared.domain.value_objects import DateRange, Money


class BookingStatus(models.TextChoices):
    CONFIRMED = "confirmed", _("Confirmed")
    CHECKED_IN = "checked_in", _("Checked-in")
    CHECKED_OUT = "checked_out", _("Checked-out")
    CANCELLED = "cancelled", _("Cancelled")

    @classmethod
    def parse(cls, value) -> "BookingStatus":
        """Resolve a stored value, member name or label; blank means CONFIRMED."""
        return parse_choice(cls, value, default=cls.CONFIRMED)


# Statuses that hold the room for their dates.
BLOCKING_STATUSES = (
    BookingStatus.CONFIRMED,
    BookingStatus.CHECKED_IN,
    BookingStatus.CHECKED_OUT,
)

ALLOWED_TRANSITIONS = {
    BookingStatus.CONFIRMED: {BookingStatus.CHECKED_IN, BookingStatus.CANCELLED},
    BookingStatus.CHECKED_IN: {BookingStatus.CHECKED_OUT},
    BookingStatus.CHECKED_OUT: set(),
    BookingStatus.CANCELLED: set(),
}


class BookingStateError(HotelError):
    """Raised when a status change is not allowed from the current status."""


def can_transition(current, target) -> bool:
    return BookingStatus(target) in ALLOWED_TRANSITIONS[BookingStatus(current)]


def ensure_can_check_in(status, check_in: date, today: date) -> None:
    if status != BookingStatus.CONFIRMED:
        raise BookingStateError("Only confirmed bookings can be checked in.")
    if today < check_in:
        raise BookingStateError("Cannot check in before the check-in date.")


def ensure_can_check_out(status) -> None:
    if status != BookingStatus.CHECKED_IN:
        raise BookingStateError("Only checked-in bookings can be checked out.")


def ensure_can_cancel(status) -> bool:
    """
    Check that a booking may be cancelled.

    Returns False when the booking is already cancelled, in which case the
    caller has nothing to do.
    """
    if status in (BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT):
        raise BookingStateError("Cannot cancel a booking that is already checked in or out.")
    return status != BookingStatus.CANCELLED


def calculate_total_price(price_per_night, dates: DateRange, currency: str = "EUR") -> Decimal:
    """Nights times the nightly rate, rounded to cents."""
    return (Money(price_per_night, currency) * dates.nights).quantized()
