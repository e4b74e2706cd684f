"""API views for analytics.

One overview endpoint for the front desk dashboard: room counts and
occupancy, bookings per status, revenue from paid bookings, the number of
VIP guests and the arrivals expected in a date window.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.domain.lifecycle import BookingStatus
from apps.bookings.models import Booking
from apps.guests.models import Guest
from apps.rooms.models import Room
from apps.users.permissions import IsHotelStaff


class ArrivalsWindowSerializer(serializers.Serializer):
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        start = attrs.get("start") or timezone.localdate()
        end = attrs.get("end") or start + timedelta(days=7)
        if end < start:
            raise serializers.ValidationError("End of the window must not be before its start.")
        return {"start": start, "end": end}


class OverviewAnalyticsView(APIView):
    """Return general statistics for the hotel."""

    permission_classes = [IsHotelStaff]

    def get(self, request, format=None):  # type: ignore
        window = ArrivalsWindowSerializer(data=request.query_params)
        window.is_valid(raise_exception=True)
        start, end = window.validated_data["start"], window.validated_data["end"]

        total_rooms = Room.objects.count()
        per_status = {value: 0 for value in BookingStatus.values}
        for row in Booking.objects.values("status").annotate(total=models.Count("id")):
            per_status[row["status"]] = row["total"]

        occupancy = Decimal("0.00")
        if total_rooms:
            occupancy = (Decimal(per_status[BookingStatus.CHECKED_IN]) / total_rooms).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        revenue = (
            Booking.objects.blocking()
            .filter(is_paid=True)
            .aggregate(total=models.Sum("total_price"))
            .get("total")
            or Decimal("0.00")
        )
        arrivals = Booking.objects.checking_in_between(start, end).filter(status=BookingStatus.CONFIRMED)

        return Response(
            {
                'rooms': {
                    'total': total_rooms,
                    'available': Room.objects.filter(is_available=True).count(),
                    'occupancy_rate': occupancy,
                },
                'bookings': per_status,
                'revenue': revenue,
                'vip_guests': Guest.objects.vip().count(),
                'arrivals': {
                    'start': start,
                    'end': end,
                    'count': arrivals.count(),
                },
            }
        )
