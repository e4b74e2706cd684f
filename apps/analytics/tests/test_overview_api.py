"""Tests for the analytics overview."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.services import cancel_booking, check_in_booking, create_booking, record_payment
from apps.guests.models import Guest
from apps.rooms.models import Room
from apps.users.models import User


class OverviewAPITests(APITestCase):
    def setUp(self) -> None:
        self.client.force_authenticate(User.objects.create_user(email="desk@hotel.test", password="DeskPass123"))
        today = timezone.localdate()
        guest = Guest.objects.create(first_name="John", last_name="Doe", loyalty_points=1500)
        rooms = [
            Room.objects.create(room_number=number, price_per_night=Decimal("100.00"), max_occupancy=2)
            for number in (101, 102, 103, 104)
        ]
        staying = create_booking(guest, rooms[0], today, today + timedelta(days=2))
        check_in_booking(staying.pk)
        record_payment(staying.pk, "Card")
        arriving = create_booking(guest, rooms[1], today + timedelta(days=3), today + timedelta(days=4))
        record_payment(arriving.pk, "Cash")
        cancelled = create_booking(guest, rooms[2], today + timedelta(days=1), today + timedelta(days=2))
        record_payment(cancelled.pk, "Cash")
        cancel_booking(cancelled.pk)
        self.today = today

    def test_overview(self) -> None:
        response = self.client.get(reverse("analytics-overview"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        data = response.data
        self.assertEqual(data["rooms"]["total"], 4)
        self.assertEqual(data["rooms"]["available"], 3)
        self.assertEqual(data["rooms"]["occupancy_rate"], Decimal("0.25"))
        self.assertEqual(data["bookings"]["checked_in"], 1)
        self.assertEqual(data["bookings"]["confirmed"], 1)
        self.assertEqual(data["bookings"]["cancelled"], 1)
        self.assertEqual(data["bookings"]["checked_out"], 0)
        self.assertEqual(data["revenue"], Decimal("300.00"))
        self.assertEqual(data["vip_guests"], 1)
        self.assertEqual(data["arrivals"]["count"], 1)

    def test_arrivals_window(self) -> None:
        response = self.client.get(
            reverse("analytics-overview"),
            {"start": str(self.today), "end": str(self.today + timedelta(days=1))},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["arrivals"]["count"], 0)

        bad = self.client.get(
            reverse("analytics-overview"),
            {"start": str(self.today), "end": str(self.today - timedelta(days=1))},
        )
        self.assertEqual(bad.status_code, status.HTTP_400_BAD_REQUEST)
