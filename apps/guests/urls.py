"""URL routing for guest records."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import GuestViewSet

router = DefaultRouter()
router.register(r"", GuestViewSet, basename="guest")

urlpatterns = [
    path("", include(router.urls)),
]
