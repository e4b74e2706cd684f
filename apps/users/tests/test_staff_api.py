"""Tests for staff profile and token endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class StaffAPITests(APITestCase):
    def setUp(self) -> None:
        self.receptionist = User.objects.create_user(
            email="desk@hotel.test",
            password="DeskPass123",
            first_name="Rita",
            last_name="Desk",
        )
        self.manager = User.objects.create_user(
            email="manager@hotel.test",
            password="ManagerPass123",
            role=User.Role.MANAGER,
        )

    def test_create_user_defaults_to_receptionist(self) -> None:
        self.assertEqual(self.receptionist.role, User.Role.RECEPTIONIST)
        self.assertTrue(self.receptionist.is_front_desk())
        self.assertFalse(self.receptionist.is_manager())
        self.assertTrue(self.manager.is_manager())

    def test_superuser_is_admin(self) -> None:
        admin = User.objects.create_superuser(email="root@hotel.test", password="RootPass123")
        self.assertEqual(admin.role, User.Role.ADMIN)
        self.assertTrue(admin.is_manager())

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("staff-me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_returns_profile(self) -> None:
        self.client.force_authenticate(self.receptionist)
        response = self.client.get(reverse("staff-me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["email"], "desk@hotel.test")
        self.assertEqual(response.data["full_name"], "Rita Desk")
        self.assertEqual(response.data["role"], User.Role.RECEPTIONIST)

    def test_me_cannot_change_role(self) -> None:
        self.client.force_authenticate(self.receptionist)
        response = self.client.patch(
            reverse("staff-me"),
            {"phone": "+31-600000000", "role": User.Role.ADMIN},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.receptionist.refresh_from_db()
        self.assertEqual(self.receptionist.phone, "+31-600000000")
        self.assertEqual(self.receptionist.role, User.Role.RECEPTIONIST)

    def test_token_obtain_and_use(self) -> None:
        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "desk@hotel.test", "password": "DeskPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("refresh", response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get(reverse("staff-me"))
        self.assertEqual(me.status_code, status.HTTP_200_OK, me.data)
        self.assertEqual(me.data["email"], "desk@hotel.test")

    def test_token_rejects_wrong_password(self) -> None:
        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "desk@hotel.test", "password": "nope"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
