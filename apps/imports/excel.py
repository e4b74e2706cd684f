"""
Workbook reading helpers.

Sheets are read with openpyxl in read-only mode. Row 1 is a header; every
following row that is not completely blank is returned padded to the
number of columns the importer expects. Cell helpers accept whatever
openpyxl yields for a cell (str, int, float, bool, datetime or None).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from zipfile import BadZipFile

from openpyxl import load_workbook  # type: ignore
from openpyxl.utils.exceptions import InvalidFileException  # type: ignore

from shared.domain.base import HotelError


class ImportFailedError(HotelError):
    """Raised when a workbook cannot be read or its rows cannot be stored."""


def cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def cell_number(value) -> Decimal:
    """Numeric value of a cell; text that is not a number counts as 0."""
    if isinstance(value, bool) or value is None:
        return Decimal(0)
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return Decimal(0)
    else:
        return Decimal(0)
    return number if number.is_finite() else Decimal(0)


def cell_int(value) -> int:
    return int(cell_number(value))


def cell_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if cell_text(value).lower() in ("true", "yes", "y"):
        return True
    return cell_number(value) > 0


def cell_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = cell_text(value)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"{text or 'empty cell'!r} is not a date (expected YYYY-MM-DD).") from None


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def read_rows(source, width: int) -> list[tuple[int, tuple]]:
    """Return ``(row_number, values)`` for every data row of the first sheet."""
    try:
        workbook = load_workbook(source, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, OSError) as exc:
        raise ImportFailedError(f"Cannot read workbook: {exc}") from exc

    rows = []
    try:
        sheet = workbook.worksheets[0]
        for row_number, row in enumerate(sheet.iter_rows(min_row=2, values_only=True), start=2):
            values = tuple(row[:width])
            values += (None,) * (width - len(values))
            if all(_is_blank(value) for value in values):
                continue
            rows.append((row_number, values))
    finally:
        workbook.close()
    return rows
