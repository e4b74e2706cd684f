"""Lenient parsing of Django ``TextChoices`` from user supplied text.

Spreadsheets and legacy rows spell enum values in several ways
("Checked-in", "CHECKED_IN", "checked_in"); all of them resolve to the
same member.
"""

from __future__ import annotations

from typing import TypeVar

from django.db import models  # type: ignore

ChoiceT = TypeVar("ChoiceT", bound=models.TextChoices)


def _normalize(text: str) -> str:
    return text.strip().lower().replace("-", "_").replace(" ", "_")


def parse_choice(choices: type[ChoiceT], value, default: ChoiceT | None = None) -> ChoiceT:
    """Resolve ``value`` by stored value, member name or display label.

    Blank input returns ``default``; when there is no default, or the text
    matches nothing, ``ValueError`` is raised.
    """
    if value is None or not str(value).strip():
        if default is None:
            raise ValueError(f"A {choices.__name__} value is required.")
        return default

    key = _normalize(str(value))
    for member in choices:
        if key in (_normalize(member.value), member.name.lower(), _normalize(str(member.label))):
            return member
    raise ValueError(f"Unknown {choices.__name__}: {value!r}")
