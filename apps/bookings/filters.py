"""FilterSet for the booking list."""

from __future__ import annotations

import django_filters  # type: ignore

from .domain.lifecycle import BookingStatus
from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=BookingStatus.choices)
    check_in_from = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    check_in_to = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")
    is_paid = django_filters.BooleanFilter()

    class Meta:
        model = Booking
        fields = ["status", "guest", "room", "is_paid"]
