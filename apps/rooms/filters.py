"""FilterSet for the room list."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Room


class RoomFilterSet(django_filters.FilterSet):
    room_type = django_filters.ChoiceFilter(choices=Room.RoomType.choices)
    status = django_filters.ChoiceFilter(choices=Room.Status.choices)
    is_available = django_filters.BooleanFilter()
    has_balcony = django_filters.BooleanFilter()
    price_min = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="lte")
    guests = django_filters.NumberFilter(field_name="max_occupancy", lookup_expr="gte")
    amenity = django_filters.CharFilter(field_name="amenities", lookup_expr="icontains")

    class Meta:
        model = Room
        fields = [
            "room_type",
            "status",
            "is_available",
            "has_balcony",
        ]
