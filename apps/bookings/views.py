"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsHotelStaff
from shared.domain.base import HotelError

from .filters import BookingFilterSet
from .models import Booking
from .serializers import BookingSerializer, PaymentSerializer
from .services import (
    BookingNotFoundError,
    cancel_booking,
    check_in_booking,
    check_out_booking,
    delete_booking,
    record_payment,
)


class BookingViewSet(viewsets.ModelViewSet):
    """Front desk booking API: CRUD plus the check-in, check-out, cancel and pay actions."""

    queryset = Booking.objects.select_related("guest", "room").all()
    serializer_class = BookingSerializer
    permission_classes = [IsHotelStaff]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["check_in", "check_out", "total_price", "created_at"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def handle_exception(self, exc):  # type: ignore
        if isinstance(exc, BookingNotFoundError):
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        if isinstance(exc, HotelError):
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return super().handle_exception(exc)

    def perform_destroy(self, instance):  # type: ignore
        delete_booking(instance.pk)

    def _lifecycle_response(self, booking: Booking) -> Response:
        return Response(self.get_serializer(booking).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        return self._lifecycle_response(check_in_booking(booking.pk))

    @action(detail=True, methods=["post"], url_path="check-out")
    def check_out(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        return self._lifecycle_response(check_out_booking(booking.pk))

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        return self._lifecycle_response(cancel_booking(booking.pk))

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        payload = PaymentSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        return self._lifecycle_response(record_payment(booking.pk, payload.validated_data["method"]))
