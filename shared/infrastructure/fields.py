"""
Custom Django model fields.

Provides CommaSeparatedListField that stores a list of short strings
(room amenities) as a single comma-separated text column, the layout the
hotel schema and the Excel sheets use.
"""

from django import forms
from django.core.exceptions import ValidationError
from django.db import models


def split_items(value: str) -> list[str]:
    """Split comma-separated text, dropping blanks and surrounding spaces."""
    return [item.strip() for item in value.split(',') if item.strip()]


class CommaSeparatedFormField(forms.CharField):
    """Form field that edits a list as ``a, b, c`` text."""

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            return ', '.join(value)
        return value

    def to_python(self, value):
        if isinstance(value, (list, tuple)):
            return list(value)
        return split_items(super().to_python(value) or '')


class CommaSeparatedListField(models.TextField):
    """
    TextField that exposes its content as a Python list.

    Stores ``["WiFi", "TV"]`` as ``"WiFi, TV"`` and parses both ``","``
    and ``", "`` separated text when loading.
    """

    description = "List of strings stored as comma-separated text"

    def __init__(self, *args, separator: str = ', ', **kwargs):
        self.separator = separator
        kwargs.setdefault('blank', True)
        kwargs.setdefault('default', list)
        super().__init__(*args, **kwargs)

    def deconstruct(self):
        name, path, args, kwargs = super().deconstruct()
        if self.separator != ', ':
            kwargs['separator'] = self.separator
        return name, path, args, kwargs

    def from_db_value(self, value, expression, connection):
        """Parse when loading from database."""
        return self.to_python(value)

    def to_python(self, value):
        """Convert to a list of strings."""
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(item).strip() for item in value if str(item).strip()]
        return split_items(str(value))

    def validate(self, value, model_instance):
        super().validate(value, model_instance)
        if any(',' in str(item) for item in value or []):
            raise ValidationError('Items cannot contain commas.', code='invalid')

    def get_prep_value(self, value):
        """Join before saving to database."""
        return self.separator.join(self.to_python(value))

    def value_to_string(self, obj):
        return self.get_prep_value(self.value_from_object(obj))

    def formfield(self, **kwargs):
        return super().formfield(**{'form_class': CommaSeparatedFormField, **kwargs})
