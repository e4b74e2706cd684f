"""Serializers for workbook uploads."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class WorkbookUploadSerializer(serializers.Serializer):
    file = serializers.FileField()

    def validate_file(self, value):  # type: ignore
        if not value.name.lower().endswith((".xlsx", ".xlsm")):
            raise serializers.ValidationError("Upload an .xlsx workbook.")
        return value
