"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.guests.models import Guest
from apps.rooms.models import Room

from .domain.lifecycle import BookingStatus
from .models import Booking
from .services import (
    InvalidBookingError,
    RoomNotAvailableError,
    create_booking,
    update_booking,
)


class BookingSerializer(serializers.ModelSerializer):
    """Booking with the guest and room summarised for list views."""

    guest = serializers.PrimaryKeyRelatedField(queryset=Guest.objects.all())
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all())
    guest_name = serializers.ReadOnlyField(source="guest.full_name")
    room_type = serializers.ReadOnlyField(source="room.room_type")
    number_of_guests = serializers.IntegerField(min_value=1, default=1)
    number_of_nights = serializers.ReadOnlyField()
    status = serializers.ChoiceField(choices=BookingStatus.choices, required=False)

    class Meta:
        model = Booking
        fields = [
            "id",
            "guest",
            "guest_name",
            "room",
            "room_type",
            "check_in",
            "check_out",
            "number_of_nights",
            "number_of_guests",
            "total_price",
            "status",
            "is_paid",
            "payment_method",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "total_price",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "payment_method": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        check_in = attrs.get("check_in", getattr(self.instance, "check_in", None))
        check_out = attrs.get("check_out", getattr(self.instance, "check_out", None))
        if check_in and check_out and check_in >= check_out:
            raise serializers.ValidationError("Check-out date must be after check-in date.")
        if self.instance is None and attrs.get("status", BookingStatus.CONFIRMED) != BookingStatus.CONFIRMED:
            raise serializers.ValidationError({"status": ["New bookings are always confirmed."]})
        return attrs

    def create(self, validated_data):  # type: ignore
        try:
            return create_booking(
                guest=validated_data["guest"],
                room=validated_data["room"],
                check_in=validated_data["check_in"],
                check_out=validated_data["check_out"],
                number_of_guests=validated_data.get("number_of_guests", 1),
                payment_method=validated_data.get("payment_method", ""),
            )
        except (RoomNotAvailableError, InvalidBookingError) as exc:
            raise serializers.ValidationError({"non_field_errors": [str(exc)]})

    def update(self, instance, validated_data):  # type: ignore
        try:
            return update_booking(instance, **validated_data)
        except (RoomNotAvailableError, InvalidBookingError) as exc:
            raise serializers.ValidationError({"non_field_errors": [str(exc)]})


class PaymentSerializer(serializers.Serializer):
    method = serializers.CharField(max_length=50)
