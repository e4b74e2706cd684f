"""Admin registration for bookings."""

from __future__ import annotations

from django import forms
from django.conf import settings
from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from shared.domain.base import HotelError
from shared.domain.value_objects import DateRange

from .domain.lifecycle import calculate_total_price
from .models import Booking
from .services import (
    cancel_booking,
    check_in_booking,
    check_out_booking,
    ensure_room_is_available,
)


class BookingAdminForm(forms.ModelForm):
    class Meta:
        model = Booking
        fields = "__all__"

    def clean(self):  # type: ignore
        cleaned = super().clean()
        room = cleaned.get("room")
        check_in = cleaned.get("check_in")
        check_out = cleaned.get("check_out")
        guests = cleaned.get("number_of_guests")
        if not (room and check_in and check_out):
            return cleaned
        if check_out <= check_in:
            raise forms.ValidationError(_("Check-out date must be after check-in date."))
        if guests and not room.can_accommodate(guests):
            raise forms.ValidationError(
                _("Room %(room)s holds at most %(max)s guest(s).")
                % {"room": room.room_number, "max": room.max_occupancy}
            )
        if self.instance.status != Booking.Status.CANCELLED:
            try:
                ensure_room_is_available(room, check_in, check_out, exclude_booking_id=self.instance.pk)
            except HotelError as exc:
                raise forms.ValidationError(str(exc))
        return cleaned


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    form = BookingAdminForm
    list_display = (
        "id",
        "guest",
        "room",
        "check_in",
        "check_out",
        "number_of_guests",
        "status",
        "total_price",
        "is_paid",
    )
    list_filter = ("status", "is_paid", "check_in", "room__room_type")
    search_fields = ("guest__first_name", "guest__last_name", "guest__email", "room__room_number")
    date_hierarchy = "check_in"
    autocomplete_fields = ("guest",)
    readonly_fields = ("status", "total_price", "created_at", "updated_at")
    actions = ("check_in_selected", "check_out_selected", "cancel_selected")

    def save_model(self, request, obj, form, change):  # type: ignore
        obj.total_price = calculate_total_price(
            obj.room.price_per_night,
            DateRange(obj.check_in, obj.check_out),
            settings.HOTEL_CURRENCY,
        )
        super().save_model(request, obj, form, change)

    def _apply(self, request, queryset, service, verb: str) -> None:
        done = 0
        for booking_id in queryset.values_list("pk", flat=True):
            try:
                service(booking_id)
            except HotelError as exc:
                self.message_user(request, f"#{booking_id}: {exc}", level=messages.WARNING)
            else:
                done += 1
        if done:
            self.message_user(request, f"{done} booking(s) {verb}.")

    @admin.action(description=_("Check in selected bookings"))
    def check_in_selected(self, request, queryset):  # type: ignore
        self._apply(request, queryset, check_in_booking, "checked in")

    @admin.action(description=_("Check out selected bookings"))
    def check_out_selected(self, request, queryset):  # type: ignore
        self._apply(request, queryset, check_out_booking, "checked out")

    @admin.action(description=_("Cancel selected bookings"))
    def cancel_selected(self, request, queryset):  # type: ignore
        self._apply(request, queryset, cancel_booking, "cancelled")
