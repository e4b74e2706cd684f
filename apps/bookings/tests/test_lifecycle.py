"""Unit tests for booking status rules and pricing."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.lifecycle import (
    BookingStateError,
    BookingStatus,
    calculate_total_price,
    can_transition,
    ensure_can_cancel,
    ensure_can_check_in,
    ensure_can_check_out,
)
from shared.domain.value_objects import DateRange


@pytest.mark.parametrize(
    "text, expected",
    [
        ("checked_in", BookingStatus.CHECKED_IN),
        ("CHECKED_IN", BookingStatus.CHECKED_IN),
        ("Checked-in", BookingStatus.CHECKED_IN),
        ("checked out", BookingStatus.CHECKED_OUT),
        ("Cancelled", BookingStatus.CANCELLED),
        ("", BookingStatus.CONFIRMED),
        (None, BookingStatus.CONFIRMED),
    ],
)
def test_parse_status(text, expected):
    assert BookingStatus.parse(text) == expected


def test_parse_unknown_status():
    with pytest.raises(ValueError):
        BookingStatus.parse("pending")


def test_allowed_transitions():
    assert can_transition(BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN)
    assert can_transition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED)
    assert can_transition(BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT)
    assert not can_transition(BookingStatus.CHECKED_IN, BookingStatus.CANCELLED)
    assert not can_transition(BookingStatus.CHECKED_OUT, BookingStatus.CHECKED_IN)
    assert not can_transition(BookingStatus.CANCELLED, BookingStatus.CONFIRMED)
    assert not can_transition("confirmed", "checked_out")


def test_check_in_not_before_arrival_day():
    with pytest.raises(BookingStateError, match="before the check-in date"):
        ensure_can_check_in(BookingStatus.CONFIRMED, date(2025, 5, 10), today=date(2025, 5, 9))
    ensure_can_check_in(BookingStatus.CONFIRMED, date(2025, 5, 10), today=date(2025, 5, 10))
    ensure_can_check_in(BookingStatus.CONFIRMED, date(2025, 5, 10), today=date(2025, 5, 12))


def test_check_in_requires_confirmed():
    with pytest.raises(BookingStateError, match="Only confirmed bookings can be checked in."):
        ensure_can_check_in(BookingStatus.CANCELLED, date(2025, 5, 10), today=date(2025, 5, 10))


def test_check_out_requires_checked_in():
    ensure_can_check_out(BookingStatus.CHECKED_IN)
    with pytest.raises(BookingStateError, match="Only checked-in bookings can be checked out."):
        ensure_can_check_out(BookingStatus.CONFIRMED)


def test_cancel_rules():
    assert ensure_can_cancel(BookingStatus.CONFIRMED) is True
    assert ensure_can_cancel(BookingStatus.CANCELLED) is False
    for status in (BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT):
        with pytest.raises(BookingStateError, match="already checked in or out"):
            ensure_can_cancel(status)


def test_total_price_is_nights_times_rate():
    dates = DateRange(date(2025, 1, 1), date(2025, 1, 4))
    assert calculate_total_price(Decimal("80.00"), dates) == Decimal("240.00")
    assert calculate_total_price("99.995", DateRange(date(2025, 1, 1), date(2025, 1, 2))) == Decimal("100.00")
