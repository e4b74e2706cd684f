"""Admin registrations for guests."""

from __future__ import annotations

from django.contrib import admin

from apps.bookings.models import Booking

from .models import Guest


class GuestBookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    fields = ("room", "check_in", "check_out", "status", "total_price", "is_paid")
    readonly_fields = fields
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):  # type: ignore
        return False


@admin.register(Guest)
class GuestAdmin(admin.ModelAdmin):
    list_display = ("full_name", "email", "phone", "nationality", "loyalty_points")
    list_filter = ("nationality",)
    search_fields = ("first_name", "last_name", "email", "phone")
    readonly_fields = ("created_at", "updated_at")
    inlines = (GuestBookingInline,)
