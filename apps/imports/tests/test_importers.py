"""Tests for the Excel importers and the import command."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from io import BytesIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError

from apps.bookings.domain.lifecycle import BookingStatus
from apps.bookings.models import Booking
from apps.guests.models import Guest
from apps.imports.excel import ImportFailedError
from apps.imports.services import (
    import_bookings,
    import_guests,
    import_hotel_data,
    import_rooms,
)
from apps.rooms.models import Room
from openpyxl import Workbook

ROOM_HEADER = ["room_number", "room_type", "price", "max_occupancy", "balcony", "amenities", "available", "status"]
GUEST_HEADER = ["id", "first_name", "last_name", "email", "phone", "loyalty_points", "nationality"]
BOOKING_HEADER = ["id", "guest_id", "room_number", "check_in", "check_out", "guests", "total_price", "status"]


def make_workbook(header, *rows) -> BytesIO:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(header)
    for row in rows:
        sheet.append(list(row))
    buffer = BytesIO()
    workbook.save(buffer)
    buffer.seek(0)
    return buffer


def rooms_sheet():
    return make_workbook(
        ROOM_HEADER,
        (101, "Single", 80, 1, 0, "WiFi, TV", 1, ""),
        (102, "DOUBLE", "120.50", 2, 1, "WiFi,Minibar", 1, "Dirty"),
        (201, "deluxe", 200, 3, "yes", "", 0, "MAINTENANCE"),
    )


def guests_sheet():
    return make_workbook(
        GUEST_HEADER,
        (1, "John", "Doe", "john.doe@email.com", "123-456-7890", 150, "USA"),
        (2, "Jane", "Smith", "jane.smith@email.com", "098-765-4321", 2000, "Canada"),
        (3, "Alice", "Brown", "", "555-123-4567", 50, "UK"),
    )


@pytest.mark.django_db
def test_import_rooms():
    report = import_rooms(rooms_sheet())

    assert len(report.created) == 3
    assert report.errors == []
    single = Room.objects.get(pk=101)
    assert single.room_type == Room.RoomType.SINGLE
    assert single.amenities == ["WiFi", "TV"]
    assert single.status == Room.Status.CLEAN
    double = Room.objects.get(pk=102)
    assert double.price_per_night == Decimal("120.50")
    assert double.has_balcony is True
    assert double.status == Room.Status.DIRTY
    deluxe = Room.objects.get(pk=201)
    assert deluxe.has_balcony is True
    assert deluxe.is_available is False
    assert deluxe.status == Room.Status.MAINTENANCE


@pytest.mark.django_db
def test_import_rooms_reports_bad_rows():
    Room.objects.create(room_number=101, price_per_night=Decimal("50.00"))
    source = make_workbook(
        ROOM_HEADER,
        (101, "Single", 80, 1, 0, "", 1, ""),
        (103, "Penthouse", 80, 1, 0, "", 1, ""),
        (104, "Suite", 300, 0, 0, "", 1, ""),
        (105, "Suite", 300, 4, 1, "Jacuzzi", 1, ""),
        (105, "Suite", 300, 4, 1, "", 1, ""),
    )

    report = import_rooms(source)

    assert [room.room_number for room in report.created] == [105]
    assert [error.row for error in report.errors] == [2, 3, 4, 6]
    assert "already exists" in report.errors[0].message
    assert "Penthouse" in report.errors[1].message


@pytest.mark.django_db
def test_import_rooms_rejects_oversized_price():
    source = make_workbook(
        ROOM_HEADER,
        (101, "single", 1e30, 1, 0, "", 1, "clean"),
        (102, "single", "99999999.995", 1, 0, "", 1, "clean"),
        (103, "single", "99999999.99", 1, 0, "", 1, "clean"),
    )

    report = import_rooms(source)

    assert [room.room_number for room in report.created] == [103]
    assert [error.row for error in report.errors] == [2, 3]
    assert "too large" in report.errors[0].message


@pytest.mark.django_db
def test_import_guests_builds_id_map():
    report = import_guests(guests_sheet())

    assert len(report.created) == 3
    assert set(report.guest_id_map) == {1, 2, 3}
    jane = Guest.objects.get(pk=report.guest_id_map[2])
    assert jane.full_name == "Jane Smith"
    assert jane.is_vip
    assert Guest.objects.get(pk=report.guest_id_map[3]).email is None


@pytest.mark.django_db
def test_import_guests_rejects_duplicates_and_bad_email():
    Guest.objects.create(first_name="John", last_name="Doe", email="john.doe@email.com")
    source = make_workbook(
        GUEST_HEADER,
        (1, "John", "Doe", "JOHN.DOE@email.com", "", 0, ""),
        (2, "Bad", "Mail", "not-an-email", "", 0, ""),
        (3, "", "Nameless", "", "", 0, ""),
        (4, "Ok", "Guest", "ok@hotel.test", "", 0, ""),
        (5, "Dup", "Mail", "OK@hotel.test", "", 0, ""),
    )

    report = import_guests(source)

    assert [guest.email for guest in report.created] == ["ok@hotel.test"]
    assert [error.row for error in report.errors] == [2, 3, 4, 6]
    assert report.guest_id_map == {4: report.created[0].pk}


@pytest.mark.django_db
def test_import_bookings_with_guest_map():
    import_rooms(rooms_sheet())
    guest_report = import_guests(guests_sheet())
    source = make_workbook(
        BOOKING_HEADER,
        (1, 1, 101, date(2030, 1, 10), date(2030, 1, 13), 1, 0, "Confirmed"),
        (2, 2, 102, "2030-01-10", "2030-01-12", 2, 999.99, "checked-in"),
        (3, 3, 101, date(2030, 1, 13), date(2030, 1, 15), 1, 0, ""),
        (4, 3, 101, date(2030, 1, 12), date(2030, 1, 14), 1, 0, ""),
        (5, 3, 101, date(2030, 1, 12), date(2030, 1, 14), 1, 0, "cancelled"),
    )

    report = import_bookings(source, guest_report.guest_id_map)

    assert [error.row for error in report.errors] == [5]
    assert "Room 101 is not available" in report.errors[0].message
    assert len(report.created) == 4
    first = Booking.objects.get(room_id=101, status=BookingStatus.CONFIRMED, check_in=date(2030, 1, 10))
    assert first.guest_id == guest_report.guest_id_map[1]
    assert first.total_price == Decimal("240.00")
    second = Booking.objects.get(room_id=102)
    assert second.status == BookingStatus.CHECKED_IN
    assert second.total_price == Decimal("999.99")
    assert Booking.objects.filter(status=BookingStatus.CANCELLED).count() == 1


@pytest.mark.django_db
def test_import_bookings_checks_database_and_references():
    import_rooms(rooms_sheet())
    guest = Guest.objects.create(first_name="Walk", last_name="In")
    Booking.objects.create(
        guest=guest,
        room_id=102,
        check_in=date(2030, 2, 1),
        check_out=date(2030, 2, 5),
        total_price=Decimal("480.00"),
    )
    source = make_workbook(
        BOOKING_HEADER,
        (1, guest.pk, 102, "2030-02-04", "2030-02-06", 1, 0, ""),
        (2, guest.pk, 999, "2030-02-04", "2030-02-06", 1, 0, ""),
        (3, 424242, 101, "2030-02-04", "2030-02-06", 1, 0, ""),
        (4, guest.pk, 101, "2030-02-06", "2030-02-04", 1, 0, ""),
        (5, guest.pk, 101, "soon", "2030-02-04", 1, 0, ""),
        (6, guest.pk, 101, "2030-02-04", "2030-02-06", 3, 0, ""),
        (7, guest.pk, 101, "2030-02-04", "2030-02-06", 1, 0, "pending"),
        (8, guest.pk, 102, "2030-02-05", "2030-02-06", 2, 0, ""),
    )

    report = import_bookings(source)

    assert [error.row for error in report.errors] == [2, 3, 4, 5, 6, 7, 8]
    assert len(report.created) == 1
    assert report.created[0].total_price == Decimal("120.50")


@pytest.mark.django_db
def test_import_bookings_rejects_oversized_price():
    import_rooms(rooms_sheet())
    guest = Guest.objects.create(first_name="Walk", last_name="In")
    source = make_workbook(
        BOOKING_HEADER,
        (1, guest.pk, 101, "2030-03-01", "2030-03-03", 1, 1e30, ""),
        (2, guest.pk, 101, "2030-03-01", "2030-03-03", 1, 0, ""),
    )

    report = import_bookings(source)

    assert [error.row for error in report.errors] == [2]
    assert "too large" in report.errors[0].message
    assert [booking.total_price for booking in report.created] == [Decimal("160.00")]


@pytest.mark.django_db
def test_database_error_rolls_back(monkeypatch):
    def explode(*args, **kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(Room.objects, "bulk_create", explode)

    with pytest.raises(ImportFailedError, match="rolled back"):
        import_rooms(rooms_sheet())
    assert not Room.objects.exists()


@pytest.mark.django_db
def test_import_hotel_data_runs_in_order():
    bookings = make_workbook(
        BOOKING_HEADER,
        (1, 3, 201, "2030-03-01", "2030-03-03", 2, 0, ""),
    )

    reports = import_hotel_data(rooms=rooms_sheet(), guests=guests_sheet(), bookings=bookings)

    assert list(reports) == ["rooms", "guests", "bookings"]
    booking = reports["bookings"].created[0]
    assert booking.guest.last_name == "Brown"
    assert booking.total_price == Decimal("400.00")


@pytest.mark.django_db
def test_import_command(tmp_path):
    path = tmp_path / "rooms.xlsx"
    path.write_bytes(rooms_sheet().getvalue())

    call_command("import_hotel_data", "--rooms", str(path))

    assert Room.objects.count() == 3
    with pytest.raises(CommandError):
        call_command("import_hotel_data")
