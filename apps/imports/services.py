"""
Bulk import of hotel data from Excel workbooks.

Each importer reads the first sheet, turns rows into unsaved model
instances and reports rows it cannot accept instead of stopping at the
first problem. Accepted rows are stored with ``bulk_create`` inside one
transaction: either every accepted row is written or none is.

Sheet columns, in order:

- rooms: room_number, room_type, price_per_night, max_occupancy,
  has_balcony, amenities, is_available, status
- guests: id, first_name, last_name, email, phone, loyalty_points,
  nationality
- bookings: id, guest_id, room_number, check_in, check_out,
  number_of_guests, total_price, status
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal

import structlog
from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import validate_email  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from django.db.models.functions import Lower  # type: ignore

from apps.bookings.domain.lifecycle import BookingStatus, calculate_total_price
from apps.bookings.models import Booking
from apps.guests.models import Guest
from apps.rooms.models import Room
from shared.domain.choices import parse_choice
from shared.domain.value_objects import CENT, DateRange
from shared.infrastructure.fields import split_items

from .excel import ImportFailedError, cell_date, cell_flag, cell_int, cell_number, cell_text, read_rows

logger = structlog.get_logger(__name__)

ROOM_COLUMNS = 8
GUEST_COLUMNS = 7
BOOKING_COLUMNS = 8

ROOM_PRICE_DIGITS = Room._meta.get_field("price_per_night").max_digits
BOOKING_PRICE_DIGITS = Booking._meta.get_field("total_price").max_digits


@dataclass
class RowError:
    row: int
    message: str


@dataclass
class ImportReport:
    kind: str
    created: list = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    guest_id_map: dict[int, int] = field(default_factory=dict)

    def add_error(self, row: int, exc) -> None:
        if isinstance(exc, ValidationError):
            message = "; ".join(exc.messages)
        else:
            message = str(exc)
        self.errors.append(RowError(row, message))

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "created": len(self.created),
            "errors": [{"row": error.row, "message": error.message} for error in self.errors],
        }


def _store(model, objects: list) -> list:
    if not objects:
        return []
    try:
        with transaction.atomic():
            return model.objects.bulk_create(objects, batch_size=settings.HOTEL_IMPORT_BATCH_SIZE)
    except DatabaseError as exc:
        logger.error("import.rolled_back", model=model._meta.model_name, rows=len(objects), error=str(exc))
        raise ImportFailedError(
            f"Import of {model._meta.verbose_name_plural} rolled back: {exc}"
        ) from exc


def _finish(report: ImportReport) -> ImportReport:
    report.errors.sort(key=lambda error: error.row)
    logger.info(
        "import.finished",
        kind=report.kind,
        created=len(report.created),
        rejected=len(report.errors),
    )
    return report


def _cell_amount(value, label: str, max_digits: int) -> Decimal:
    """Non-negative money cell rounded to cents; must fit the column it lands in."""
    amount = cell_number(value)
    if amount < 0:
        raise ValueError(f"{label} cannot be negative.")
    limit = Decimal(10) ** (max_digits - 2)
    if amount >= limit or amount.quantize(CENT) >= limit:
        raise ValueError(f"{label} {amount} is too large.")
    return amount.quantize(CENT)


def _room_from_row(values: tuple) -> Room:
    number, room_type, price, occupancy, balcony, amenities, available, status = values

    room_number = cell_int(number)
    if room_number < 1:
        raise ValueError("Room number must be a positive integer.")
    price_per_night = _cell_amount(price, "Price per night", ROOM_PRICE_DIGITS)
    max_occupancy = cell_int(occupancy)
    if max_occupancy < 1:
        raise ValueError("Max occupancy must be at least 1.")

    return Room(
        room_number=room_number,
        room_type=parse_choice(Room.RoomType, cell_text(room_type)),
        price_per_night=price_per_night,
        max_occupancy=max_occupancy,
        has_balcony=cell_flag(balcony),
        amenities=split_items(cell_text(amenities)),
        is_available=cell_flag(available),
        status=parse_choice(Room.Status, cell_text(status), default=Room.Status.CLEAN),
    )


def import_rooms(source) -> ImportReport:
    report = ImportReport("rooms")
    candidates: list[tuple[int, Room]] = []
    for row_number, values in read_rows(source, ROOM_COLUMNS):
        try:
            candidates.append((row_number, _room_from_row(values)))
        except ValueError as exc:
            report.add_error(row_number, exc)

    taken = set(
        Room.objects.filter(pk__in=[room.room_number for _, room in candidates]).values_list("pk", flat=True)
    )
    accepted = []
    for row_number, room in candidates:
        if room.room_number in taken:
            report.add_error(row_number, f"Room {room.room_number} already exists.")
            continue
        taken.add(room.room_number)
        accepted.append(room)

    report.created = _store(Room, accepted)
    return _finish(report)


def _guest_from_row(values: tuple) -> tuple[int, Guest]:
    sheet_id, first_name, last_name, email, phone, points, nationality = values

    guest = Guest(
        first_name=cell_text(first_name),
        last_name=cell_text(last_name),
        email=cell_text(email) or None,
        phone=cell_text(phone),
        loyalty_points=cell_int(points),
        nationality=cell_text(nationality),
    )
    if not guest.first_name or not guest.last_name:
        raise ValueError("First and last name are required.")
    if guest.loyalty_points < 0:
        raise ValueError("Loyalty points cannot be negative.")
    if guest.email:
        validate_email(guest.email)
    return cell_int(sheet_id), guest


def import_guests(source) -> ImportReport:
    """Import guests; ``report.guest_id_map`` maps sheet ids to new primary keys."""
    report = ImportReport("guests")
    candidates: list[tuple[int, int, Guest]] = []
    for row_number, values in read_rows(source, GUEST_COLUMNS):
        try:
            sheet_id, guest = _guest_from_row(values)
        except (ValueError, ValidationError) as exc:
            report.add_error(row_number, exc)
            continue
        candidates.append((row_number, sheet_id, guest))

    emails = [guest.email.lower() for _, _, guest in candidates if guest.email]
    taken = set(
        Guest.objects.annotate(email_lower=Lower("email"))
        .filter(email_lower__in=emails)
        .values_list("email_lower", flat=True)
    )
    seen_ids: set[int] = set()
    accepted: list[tuple[int, Guest]] = []
    for row_number, sheet_id, guest in candidates:
        if guest.email and guest.email.lower() in taken:
            report.add_error(row_number, f"A guest with email {guest.email} already exists.")
            continue
        if sheet_id and sheet_id in seen_ids:
            report.add_error(row_number, f"Guest id {sheet_id} appears more than once.")
            continue
        if guest.email:
            taken.add(guest.email.lower())
        seen_ids.add(sheet_id)
        accepted.append((sheet_id, guest))

    report.created = _store(Guest, [guest for _, guest in accepted])
    report.guest_id_map = {
        sheet_id: guest.pk
        for (sheet_id, _), guest in zip(accepted, report.created)
        if sheet_id and guest.pk is not None
    }
    return _finish(report)


@dataclass
class _BookingRow:
    row: int
    guest_id: int
    room_number: int
    dates: DateRange
    number_of_guests: int
    total_price: Decimal
    status: BookingStatus


def _booking_from_row(row_number: int, values: tuple, guest_id_map: dict[int, int]) -> _BookingRow:
    _, guest_ref, room_number, check_in, check_out, guests, price, status = values

    guest_ref = cell_int(guest_ref)
    number_of_guests = cell_int(guests) or 1
    if number_of_guests < 1:
        raise ValueError("Number of guests must be at least 1.")
    total_price = _cell_amount(price, "Total price", BOOKING_PRICE_DIGITS)

    return _BookingRow(
        row=row_number,
        guest_id=guest_id_map.get(guest_ref, guest_ref),
        room_number=cell_int(room_number),
        dates=DateRange(cell_date(check_in), cell_date(check_out)),
        number_of_guests=number_of_guests,
        total_price=total_price,
        status=BookingStatus.parse(cell_text(status)),
    )


def import_bookings(source, guest_id_map: dict[int, int] | None = None) -> ImportReport:
    """
    Import bookings.

    ``guest_id`` cells are translated through ``guest_id_map`` (the map
    returned by :func:`import_guests`); ids missing from the map are taken
    as database ids. Rows whose room is already booked, in the database or
    earlier in the same sheet, are rejected.
    """
    report = ImportReport("bookings")
    guest_id_map = guest_id_map or {}
    parsed: list[_BookingRow] = []
    for row_number, values in read_rows(source, BOOKING_COLUMNS):
        try:
            parsed.append(_booking_from_row(row_number, values, guest_id_map))
        except ValueError as exc:
            report.add_error(row_number, exc)

    guests = Guest.objects.in_bulk({row.guest_id for row in parsed})
    rooms = Room.objects.in_bulk({row.room_number for row in parsed})

    with transaction.atomic():
        accepted: list[Booking] = []
        claimed: dict[int, list[DateRange]] = defaultdict(list)
        for row in parsed:
            guest = guests.get(row.guest_id)
            room = rooms.get(row.room_number)
            if guest is None:
                report.add_error(row.row, f"Guest {row.guest_id} does not exist.")
                continue
            if room is None:
                report.add_error(row.row, f"Room {row.room_number} does not exist.")
                continue
            if not room.can_accommodate(row.number_of_guests):
                report.add_error(row.row, f"Room {room.room_number} holds at most {room.max_occupancy} guest(s).")
                continue
            if row.total_price > 0:
                total_price = row.total_price
            else:
                total_price = calculate_total_price(room.price_per_night, row.dates, settings.HOTEL_CURRENCY)
                if total_price >= Decimal(10) ** (BOOKING_PRICE_DIGITS - 2):
                    report.add_error(row.row, f"Total price {total_price} is too large.")
                    continue

            if row.status != BookingStatus.CANCELLED:
                clash = any(row.dates.overlaps_with(other) for other in claimed[room.room_number])
                if clash or Booking.objects.overlapping(room, row.dates).exists():
                    report.add_error(
                        row.row,
                        f"Room {room.room_number} is not available from "
                        f"{row.dates.start_date} to {row.dates.end_date}",
                    )
                    continue
                claimed[room.room_number].append(row.dates)

            accepted.append(
                Booking(
                    guest=guest,
                    room=room,
                    check_in=row.dates.start_date,
                    check_out=row.dates.end_date,
                    number_of_guests=row.number_of_guests,
                    total_price=total_price,
                    status=row.status,
                )
            )

        report.created = _store(Booking, accepted)
    return _finish(report)


def import_hotel_data(rooms=None, guests=None, bookings=None) -> dict[str, ImportReport]:
    """Import whichever workbooks are given, rooms and guests before bookings."""
    reports: dict[str, ImportReport] = {}
    guest_id_map: dict[int, int] = {}
    if rooms is not None:
        reports["rooms"] = import_rooms(rooms)
    if guests is not None:
        reports["guests"] = import_guests(guests)
        guest_id_map = reports["guests"].guest_id_map
    if bookings is not None:
        reports["bookings"] = import_bookings(bookings, guest_id_map)
    return reports
