"""Serializers for guest records."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore
from rest_framework.validators import UniqueValidator  # type: ignore

from .models import Guest


class GuestSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()
    is_vip = serializers.ReadOnlyField()
    email = serializers.EmailField(
        required=False,
        allow_blank=True,
        allow_null=True,
        validators=[UniqueValidator(queryset=Guest.objects.all(), lookup="iexact")],
    )

    class Meta:
        model = Guest
        fields = [
            "id",
            "first_name",
            "last_name",
            "full_name",
            "email",
            "phone",
            "loyalty_points",
            "nationality",
            "is_vip",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_email(self, value):  # type: ignore
        return (value or "").strip() or None
