"""Admin registrations for the room inventory."""

from __future__ import annotations

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = (
        "room_number",
        "room_type",
        "price_per_night",
        "max_occupancy",
        "has_balcony",
        "is_available",
        "status",
    )
    list_editable = ("is_available", "status")
    list_filter = ("room_type", "status", "is_available", "has_balcony")
    search_fields = ("room_number", "amenities")
    readonly_fields = ("created_at", "updated_at")
    actions = ("mark_clean", "mark_dirty")

    @admin.action(description=_("Mark selected rooms as clean"))
    def mark_clean(self, request, queryset):  # type: ignore
        updated = queryset.update(status=Room.Status.CLEAN)
        self.message_user(request, _("%d room(s) marked clean.") % updated)

    @admin.action(description=_("Mark selected rooms as dirty"))
    def mark_dirty(self, request, queryset):  # type: ignore
        updated = queryset.update(status=Room.Status.DIRTY)
        self.message_user(request, _("%d room(s) marked dirty.") % updated)
