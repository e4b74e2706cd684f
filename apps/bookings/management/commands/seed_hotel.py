from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import create_booking
from apps.guests.models import Guest
from apps.rooms.models import Room
from shared.domain.value_objects import DateRange

ROOMS = [
    (101, Room.RoomType.SINGLE, Decimal("80.00"), 1, False, ["WiFi", "TV"]),
    (102, Room.RoomType.DOUBLE, Decimal("120.00"), 2, True, ["WiFi", "Minibar"]),
    (201, Room.RoomType.DELUXE, Decimal("200.00"), 3, True, ["WiFi", "Jacuzzi"]),
]

GUESTS = [
    ("John", "Doe", "john.doe@email.com", "123-456-7890", 150, "USA"),
    ("Jane", "Smith", "jane.smith@email.com", "098-765-4321", 200, "Canada"),
    ("Alice", "Brown", "alice.brown@email.com", "555-123-4567", 50, "UK"),
]

# (guest index, room number, days from today to check-in, nights, guests)
BOOKINGS = [
    (0, 101, 2, 3, 1),
    (1, 102, 1, 3, 2),
    (2, 201, 7, 3, 2),
]


class Command(BaseCommand):
    help = "Fill an empty database with demo rooms, guests and bookings"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete all bookings, rooms and guests first",
        )

    @transaction.atomic
    def handle(self, *args, **options):  # type: ignore
        if options["clear"]:
            Booking.objects.all().delete()
            Room.objects.all().delete()
            Guest.objects.all().delete()
            self.stdout.write("Existing hotel data removed.")

        rooms = {}
        for number, room_type, price, occupancy, balcony, amenities in ROOMS:
            room, _ = Room.objects.get_or_create(
                room_number=number,
                defaults={
                    "room_type": room_type,
                    "price_per_night": price,
                    "max_occupancy": occupancy,
                    "has_balcony": balcony,
                },
            )
            for item in amenities:
                room.add_amenity(item)
            rooms[number] = room

        guests = []
        for first_name, last_name, email, phone, points, nationality in GUESTS:
            guest, _ = Guest.objects.get_or_create(
                email=email,
                defaults={
                    "first_name": first_name,
                    "last_name": last_name,
                    "phone": phone,
                    "loyalty_points": points,
                    "nationality": nationality,
                },
            )
            guests.append(guest)

        today = timezone.localdate()
        created = 0
        for guest_index, room_number, offset, nights, party in BOOKINGS:
            check_in = today + timedelta(days=offset)
            check_out = check_in + timedelta(days=nights)
            room = rooms[room_number]
            if Booking.objects.overlapping(room, DateRange(check_in, check_out)).exists():
                continue
            create_booking(guests[guest_index], room, check_in, check_out, number_of_guests=party)
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(rooms)} rooms, {len(guests)} guests and {created} new bookings."
            )
        )
