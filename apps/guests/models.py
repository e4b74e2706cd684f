"""Guest records kept by the front desk."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models, transaction  # type: ignore
from django.db.models import Count, Q  # type: ignore
from django.db.models.functions import Lower  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.lifecycle import BookingStatus


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?[\d\-\s()]{5,30}$",
    message=_("Invalid phone number."),
)


class GuestQuerySet(models.QuerySet):
    def with_booking_count(self):
        return self.annotate(booking_count=Count("bookings", distinct=True))

    def search_by_name(self, part: str | None):
        """Case-insensitive substring match on first or last name; blank matches everyone."""
        part = (part or "").strip()
        queryset = self.order_by("last_name", "first_name")
        if not part:
            return queryset
        return queryset.filter(Q(first_name__icontains=part) | Q(last_name__icontains=part))

    def find_by_email(self, email: str | None):
        email = (email or "").strip()
        if not email:
            return None
        return self.filter(email__iexact=email).first()

    def vip(self):
        """Guests above the loyalty points or the booking count threshold."""
        return (
            self.with_booking_count()
            .filter(
                Q(loyalty_points__gt=settings.HOTEL_VIP_MIN_POINTS)
                | Q(booking_count__gt=settings.HOTEL_VIP_MIN_BOOKINGS)
            )
            .order_by("-loyalty_points", "last_name")
        )


class Guest(models.Model):
    """A person staying (or about to stay) at the hotel."""

    first_name = models.CharField(_("First name"), max_length=100)
    last_name = models.CharField(_("Last name"), max_length=100)
    email = models.EmailField(_("Email"), unique=True, null=True, blank=True)
    phone = models.CharField(_("Phone"), max_length=30, blank=True, validators=[PHONE_VALIDATOR])
    loyalty_points = models.PositiveIntegerField(_("Loyalty points"), default=0)
    nationality = models.CharField(_("Nationality"), max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = GuestQuerySet.as_manager()

    class Meta:
        verbose_name = _("Guest")
        verbose_name_plural = _("Guests")
        ordering = ["last_name", "first_name", "id"]
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="guest_name_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                Lower("email"),
                name="guest_email_ci_unique",
                violation_error_message=_("A guest with this email already exists."),
            ),
        ]

    def __str__(self) -> str:
        return self.full_name

    def clean(self) -> None:
        # Several guests may have no email; unique only applies to real addresses.
        self.email = (self.email or "").strip() or None

    def save(self, *args, **kwargs):  # type: ignore
        with transaction.atomic():
            self.clean()
            super().save(*args, **kwargs)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_vip(self) -> bool:
        if self.loyalty_points > settings.HOTEL_VIP_MIN_POINTS:
            return True
        booking_count = getattr(self, "booking_count", None)
        if booking_count is None:
            booking_count = self.bookings.count() if self.pk else 0
        return booking_count > settings.HOTEL_VIP_MIN_BOOKINGS

    def add_loyalty_points(self, points: int) -> int:
        if points < 0:
            raise ValueError("Loyalty points to add cannot be negative.")
        self.loyalty_points += points
        self.save(update_fields=["loyalty_points", "updated_at"])
        return self.loyalty_points

    def total_nights_stayed(self) -> int:
        stays = self.bookings.exclude(status=BookingStatus.CANCELLED).values_list("check_in", "check_out")
        return sum((check_out - check_in).days for check_in, check_out in stays)
