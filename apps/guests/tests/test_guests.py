"""Tests for guest queries and the guest API."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.domain.lifecycle import BookingStatus
from apps.bookings.models import Booking
from apps.guests.models import Guest
from apps.rooms.models import Room
from apps.users.models import User


def _book(guest, room, start: date, nights: int, status=BookingStatus.CONFIRMED) -> Booking:
    return Booking.objects.create(
        guest=guest,
        room=room,
        check_in=start,
        check_out=start + timedelta(days=nights),
        status=status,
    )


@pytest.mark.django_db
def test_search_by_name():
    Guest.objects.create(first_name="John", last_name="Doe")
    Guest.objects.create(first_name="Jane", last_name="Johnson")
    Guest.objects.create(first_name="Alice", last_name="Brown")

    names = [guest.full_name for guest in Guest.objects.search_by_name("JOHN")]

    assert names == ["John Doe", "Jane Johnson"]
    everyone = ["Alice Brown", "John Doe", "Jane Johnson"]
    assert [guest.full_name for guest in Guest.objects.search_by_name("   ")] == everyone
    assert [guest.full_name for guest in Guest.objects.search_by_name(None)] == everyone


@pytest.mark.django_db
def test_find_by_email_and_blank_emails():
    john = Guest.objects.create(first_name="John", last_name="Doe", email="john.doe@email.com")
    Guest.objects.create(first_name="No", last_name="Mail", email="")
    Guest.objects.create(first_name="Also", last_name="NoMail", email="  ")

    assert Guest.objects.find_by_email(" John.Doe@email.com ") == john
    assert Guest.objects.find_by_email("") is None
    assert Guest.objects.find_by_email("nobody@email.com") is None
    assert Guest.objects.filter(email__isnull=True).count() == 2


@pytest.mark.django_db
def test_email_unique_ignores_case():
    Guest.objects.create(first_name="John", last_name="Doe", email="John.Doe@email.com")

    with pytest.raises(IntegrityError), transaction.atomic():
        Guest.objects.create(first_name="Johnny", last_name="Doe", email="john.doe@EMAIL.com")

    duplicate = Guest(first_name="Johnny", last_name="Doe", email="JOHN.DOE@email.com")
    with pytest.raises(ValidationError):
        duplicate.full_clean()
    assert Guest.objects.count() == 1


@pytest.mark.django_db
@override_settings(HOTEL_VIP_MIN_POINTS=1000, HOTEL_VIP_MIN_BOOKINGS=2)
def test_vip_by_points_or_bookings():
    room = Room.objects.create(room_number=101, price_per_night=Decimal("80.00"))
    points = Guest.objects.create(first_name="Rich", last_name="Guest", loyalty_points=1001)
    edge = Guest.objects.create(first_name="Edge", last_name="Case", loyalty_points=1000)
    regular = Guest.objects.create(first_name="Re", last_name="Gular", loyalty_points=10)
    for offset in range(3):
        _book(regular, room, date(2030, 1, 1) + timedelta(days=offset * 2), 1)

    assert list(Guest.objects.vip()) == [points, regular]
    assert points.is_vip
    assert not edge.is_vip
    assert regular.is_vip


@pytest.mark.django_db
def test_loyalty_points_and_nights():
    room = Room.objects.create(room_number=101, price_per_night=Decimal("80.00"))
    guest = Guest.objects.create(first_name="John", last_name="Doe", loyalty_points=100)
    _book(guest, room, date(2030, 1, 1), 3)
    _book(guest, room, date(2030, 2, 1), 2, status=BookingStatus.CHECKED_OUT)
    _book(guest, room, date(2030, 3, 1), 5, status=BookingStatus.CANCELLED)

    assert guest.add_loyalty_points(50) == 150
    guest.refresh_from_db()
    assert guest.loyalty_points == 150
    with pytest.raises(ValueError):
        guest.add_loyalty_points(-1)
    assert guest.total_nights_stayed() == 5


class GuestAPITests(APITestCase):
    def setUp(self) -> None:
        self.client.force_authenticate(User.objects.create_user(email="desk@hotel.test", password="DeskPass123"))
        self.john = Guest.objects.create(
            first_name="John",
            last_name="Doe",
            email="john.doe@email.com",
            loyalty_points=1500,
            nationality="USA",
        )
        self.jane = Guest.objects.create(first_name="Jane", last_name="Smith", nationality="Canada")
        self.list_url = reverse("guest-list")

    def test_create_guest(self) -> None:
        response = self.client.post(
            self.list_url,
            {"first_name": "Alice", "last_name": "Brown", "email": "", "nationality": "UK"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["full_name"], "Alice Brown")
        self.assertIsNone(response.data["email"])
        self.assertFalse(response.data["is_vip"])

    def test_duplicate_email_is_rejected(self) -> None:
        response = self.client.post(
            self.list_url,
            {"first_name": "Johnny", "last_name": "Doe", "email": "JOHN.DOE@email.com"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("email", response.data)

    def test_search_and_email_filters(self) -> None:
        response = self.client.get(self.list_url, {"search": "smi"})
        self.assertEqual([row["id"] for row in response.data], [self.jane.pk])

        response = self.client.get(self.list_url, {"email": "John.Doe@email.com"})
        self.assertEqual([row["id"] for row in response.data], [self.john.pk])

    def test_vip_list(self) -> None:
        response = self.client.get(reverse("guest-vip"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([row["id"] for row in response.data], [self.john.pk])
        self.assertTrue(response.data[0]["is_vip"])

    def test_booking_history_and_protected_delete(self) -> None:
        room = Room.objects.create(room_number=101, price_per_night=Decimal("80.00"))
        _book(self.jane, room, date(2030, 1, 1), 2)

        history = self.client.get(reverse("guest-bookings", args=[self.jane.pk]))
        self.assertEqual(history.status_code, status.HTTP_200_OK, history.data)
        self.assertEqual(len(history.data), 1)
        self.assertEqual(history.data[0]["room"], 101)

        response = self.client.delete(reverse("guest-detail", args=[self.jane.pk]))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Guest.objects.filter(pk=self.jane.pk).exists())

        response = self.client.delete(reverse("guest-detail", args=[self.john.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
