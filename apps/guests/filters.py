"""FilterSet for the guest list."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Guest


class GuestFilterSet(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    email = django_filters.CharFilter(field_name="email", lookup_expr="iexact")
    nationality = django_filters.CharFilter(field_name="nationality", lookup_expr="iexact")
    min_points = django_filters.NumberFilter(field_name="loyalty_points", lookup_expr="gte")

    class Meta:
        model = Guest
        fields = ["search", "email", "nationality", "min_points"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.search_by_name(value)
