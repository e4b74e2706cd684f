"""URL declarations for the users app."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import CurrentStaffView

urlpatterns = [
    path('me/', CurrentStaffView.as_view(), name='staff-me'),
]
