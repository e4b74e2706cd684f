"""API views for guest records."""

from __future__ import annotations

import structlog
from django.db.models import ProtectedError  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.serializers import BookingSerializer
from apps.users.permissions import IsHotelStaff

from .filters import GuestFilterSet
from .models import Guest
from .serializers import GuestSerializer

logger = structlog.get_logger(__name__)


class GuestViewSet(viewsets.ModelViewSet):
    """Guest CRUD for the front desk, plus VIP list and booking history."""

    queryset = Guest.objects.with_booking_count()
    serializer_class = GuestSerializer
    permission_classes = [IsHotelStaff]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = GuestFilterSet
    ordering_fields = ["last_name", "first_name", "loyalty_points", "created_at"]

    @action(detail=False, methods=["get"])
    def vip(self, request):  # type: ignore
        page = self.paginate_queryset(Guest.objects.vip())
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(Guest.objects.vip(), many=True).data)

    @action(detail=True, methods=["get"])
    def bookings(self, request, pk=None):  # type: ignore
        guest: Guest = self.get_object()  # type: ignore
        history = guest.bookings.select_related("room").order_by("-check_in")
        serializer = BookingSerializer(history, many=True, context=self.get_serializer_context())
        return Response(serializer.data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        guest: Guest = self.get_object()  # type: ignore
        try:
            guest.delete()
        except ProtectedError:
            logger.info("guest.delete_refused", guest_id=guest.pk)
            return Response(
                {"detail": "Guest has bookings and cannot be deleted."},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
