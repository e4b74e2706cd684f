"""Permission classes shared by the back office API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsHotelStaff(permissions.BasePermission):
    """Any active member of staff may use the back office."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if getattr(user, "is_superuser", False):
            return True
        return hasattr(user, "is_front_desk") and user.is_front_desk()


class IsManager(permissions.BasePermission):
    """Managers and administrators only."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "is_manager") and user.is_manager()


class IsManagerOrReadOnly(permissions.BasePermission):
    """
    Allow managers to write, but any member of staff can read.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        if not IsHotelStaff().has_permission(request, view):
            return False

        # Read-only for safe methods
        if request.method in permissions.SAFE_METHODS:
            return True

        return IsManager().has_permission(request, view)
