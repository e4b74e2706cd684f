"""Domain services for booking workflows.

Every write to a booking goes through this module: it checks the room is
free, keeps ``total_price`` in step with the dates and the room, applies
the status lifecycle and keeps ``Room.is_available`` consistent with
check-in and check-out.
"""

from __future__ import annotations

from datetime import date
from typing import Any

import structlog
from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.rooms.models import Room
from shared.domain.base import HotelError
from shared.domain.value_objects import DateRange

from .domain.lifecycle import (
    BookingStateError,
    BookingStatus,
    calculate_total_price,
    ensure_can_cancel,
    ensure_can_check_in,
    ensure_can_check_out,
)
from .models import Booking

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"guest", "room", "check_in", "check_out", "number_of_guests", "is_paid", "payment_method", "status"}
)


class RoomNotAvailableError(HotelError):
    """Raised when a room is already booked for some of the requested nights."""


class BookingNotFoundError(HotelError):
    """Raised when the booking to change no longer exists."""


class InvalidBookingError(HotelError):
    """Raised when booking data breaks a rule (dates, capacity, payment)."""


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _stay_dates(check_in, check_out) -> DateRange:
    try:
        return DateRange(check_in, check_out)
    except ValueError as exc:
        raise InvalidBookingError("Check-out date must be after check-in date.") from exc


def _ensure_capacity(room: Room, number_of_guests: int) -> None:
    if number_of_guests is None or number_of_guests < 1:
        raise InvalidBookingError("A booking needs at least one guest.")
    if not room.can_accommodate(number_of_guests):
        raise InvalidBookingError(
            f"Room {room.room_number} holds at most {room.max_occupancy} guest(s)."
        )


def _price_for(room: Room, dates: DateRange):
    return calculate_total_price(room.price_per_night, dates, settings.HOTEL_CURRENCY)


def _get_booking(booking_id) -> Booking:
    queryset = _lock_queryset_if_possible(Booking.objects.select_related("room", "guest"))
    try:
        return queryset.get(pk=booking_id)
    except Booking.DoesNotExist as exc:
        raise BookingNotFoundError(f"Booking {booking_id} does not exist.") from exc


def ensure_room_is_available(
    room,
    check_in,
    check_out,
    *,
    exclude_booking_id=None,
) -> None:
    """Ensure no other booking holds the room for any of the nights."""

    room_number = getattr(room, "pk", room)
    bookings_qs = Booking.objects.overlapping(room_number, _stay_dates(check_in, check_out))

    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

    bookings_qs = _lock_queryset_if_possible(bookings_qs)

    if bookings_qs.exists():
        raise RoomNotAvailableError(
            f"Room {room_number} is not available from {check_in} to {check_out}"
        )


@transaction.atomic
def create_booking(
    guest,
    room: Room,
    check_in: date,
    check_out: date,
    number_of_guests: int = 1,
    payment_method: str = "",
) -> Booking:
    dates = _stay_dates(check_in, check_out)
    _ensure_capacity(room, number_of_guests)
    ensure_room_is_available(room, check_in, check_out)

    booking = Booking.objects.create(
        guest=guest,
        room=room,
        check_in=check_in,
        check_out=check_out,
        number_of_guests=number_of_guests,
        payment_method=(payment_method or "").strip(),
        total_price=_price_for(room, dates),
        status=BookingStatus.CONFIRMED,
    )
    logger.info(
        "booking.created",
        booking_id=booking.pk,
        room=room.room_number,
        guest_id=booking.guest_id,
        check_in=str(check_in),
        check_out=str(check_out),
        total_price=str(booking.total_price),
    )
    return booking


@transaction.atomic
def update_booking(booking: Booking, **changes: Any) -> Booking:
    """
    Apply ``changes`` to a booking and return the saved row.

    Availability is checked again and the price recalculated only when
    the dates or the room change. A ``status`` change goes through the
    same lifecycle rules as the check-in/check-out/cancel services.
    """
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Cannot update booking field(s): {', '.join(sorted(unknown))}")

    current = _get_booking(booking.pk)
    previous = (current.check_in, current.check_out, current.room_id)
    target_status = changes.pop("status", None)

    for field, value in changes.items():
        setattr(current, field, value)

    dates = _stay_dates(current.check_in, current.check_out)
    stay_changed = previous != (current.check_in, current.check_out, current.room_id)
    if stay_changed or "number_of_guests" in changes:
        _ensure_capacity(current.room, current.number_of_guests)
    if stay_changed:
        if current.status != BookingStatus.CANCELLED:
            ensure_room_is_available(
                current.room,
                current.check_in,
                current.check_out,
                exclude_booking_id=current.pk,
            )
        current.total_price = _price_for(current.room, dates)

    current.save()

    if current.room_id != previous[2] and current.status == BookingStatus.CHECKED_IN:
        # The guest moved rooms mid-stay.
        Room.objects.set_availability(previous[2], True)
        Room.objects.set_availability(current.room_id, False)
        logger.info("booking.room_moved", booking_id=current.pk, from_room=previous[2], to_room=current.room_id)

    if target_status is not None:
        target = BookingStatus.parse(target_status)
        if target != current.status:
            _transition(current, target, timezone.localdate())

    logger.info("booking.updated", booking_id=current.pk, fields=sorted(changes), stay_changed=stay_changed)
    return current


def _transition(booking: Booking, target: BookingStatus, today: date) -> Booking:
    if target == BookingStatus.CHECKED_IN:
        ensure_can_check_in(booking.status, booking.check_in, today)
        room_available = False
    elif target == BookingStatus.CHECKED_OUT:
        ensure_can_check_out(booking.status)
        room_available = True
    elif target == BookingStatus.CANCELLED:
        if not ensure_can_cancel(booking.status):
            return booking
        room_available = True
    else:
        raise BookingStateError(f"Cannot move a booking back to {target.label}.")

    previous = booking.status
    booking.status = target
    booking.save(update_fields=["status", "updated_at"])
    Room.objects.set_availability(booking.room_id, room_available)

    logger.info(
        "booking.status_changed",
        booking_id=booking.pk,
        room=booking.room_id,
        previous=str(previous),
        status=str(target),
    )
    return booking


@transaction.atomic
def check_in_booking(booking_id, today: date | None = None) -> Booking:
    booking = _get_booking(booking_id)
    return _transition(booking, BookingStatus.CHECKED_IN, today or timezone.localdate())


@transaction.atomic
def check_out_booking(booking_id) -> Booking:
    booking = _get_booking(booking_id)
    return _transition(booking, BookingStatus.CHECKED_OUT, timezone.localdate())


@transaction.atomic
def cancel_booking(booking_id) -> Booking:
    booking = _get_booking(booking_id)
    return _transition(booking, BookingStatus.CANCELLED, timezone.localdate())


@transaction.atomic
def record_payment(booking_id, method: str) -> Booking:
    method = (method or "").strip()
    if not method:
        raise InvalidBookingError("A payment method is required.")

    booking = _get_booking(booking_id)
    booking.is_paid = True
    booking.payment_method = method
    booking.save(update_fields=["is_paid", "payment_method", "updated_at"])
    logger.info("booking.paid", booking_id=booking.pk, method=method)
    return booking


@transaction.atomic
def delete_booking(booking_id) -> None:
    deleted, _ = Booking.objects.filter(pk=booking_id).delete()
    if not deleted:
        raise BookingNotFoundError(f"Booking {booking_id} does not exist.")
    logger.info("booking.deleted", booking_id=booking_id)
