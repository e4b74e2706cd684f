"""Serializers for the room inventory."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    amenities = serializers.ListField(child=serializers.CharField(), required=False)

    class Meta:
        model = Room
        fields = [
            "room_number",
            "room_type",
            "price_per_night",
            "max_occupancy",
            "has_balcony",
            "amenities",
            "is_available",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_room_number(self, value):  # type: ignore
        if self.instance is not None and value != self.instance.pk:
            raise serializers.ValidationError("Room number cannot be changed.")
        return value

    def validate_amenities(self, value):  # type: ignore
        items = [item.strip() for item in value if item.strip()]
        if any("," in item for item in items):
            raise serializers.ValidationError("Amenity names cannot contain commas.")
        return items


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query parameters of the availability search."""

    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError("Check-out date must be after check-in date.")
        return attrs
