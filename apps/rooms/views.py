"""API views for the room inventory."""

from __future__ import annotations

import structlog
from django.db.models import ProtectedError  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsManagerOrReadOnly

from .filters import RoomFilterSet
from .models import Room
from .serializers import AvailabilityQuerySerializer, RoomSerializer

logger = structlog.get_logger(__name__)


class RoomViewSet(viewsets.ModelViewSet):
    """Rooms are readable by all staff; only managers change the inventory."""

    queryset = Room.objects.all()
    serializer_class = RoomSerializer
    permission_classes = [IsManagerOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = RoomFilterSet
    ordering_fields = ["room_number", "price_per_night", "max_occupancy", "room_type"]

    @action(detail=False, methods=["get"])
    def available(self, request):  # type: ignore
        """Rooms free for the whole ``check_in``..``check_out`` stay."""
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        rooms = self.filter_queryset(self.get_queryset()).available_for(
            params["check_in"], params["check_out"]
        )
        if "guests" in params:
            rooms = rooms.filter(max_occupancy__gte=params["guests"])
        return Response(self.get_serializer(rooms, many=True).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        room: Room = self.get_object()  # type: ignore
        try:
            room.delete()
        except ProtectedError:
            logger.info("room.delete_refused", room_number=room.pk)
            return Response(
                {"detail": "Room has bookings and cannot be deleted."},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
