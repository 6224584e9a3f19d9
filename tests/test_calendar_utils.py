"""
Tests for the calendar helpers: weekday tokens, month ends, day ranges and
strict ISO date handling.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from app.core.errors import DataError, InvalidDateRange, InvalidInput
from app.services.calendar_utils import (
    as_date,
    day_count,
    day_of_week,
    ensure_range,
    enumerate_days,
    format_iso_date,
    is_last_day_of_month,
    is_same_day,
    parse_iso_date,
    parse_timestamp,
    weekday_label,
)


class TestIsSameDay:
    def test_same_date(self):
        assert is_same_day(date(2024, 3, 15), date(2024, 3, 15))

    def test_ignores_time_of_day(self):
        assert is_same_day(datetime(2024, 3, 15, 0, 1), datetime(2024, 3, 15, 23, 59))

    def test_date_and_datetime_mix(self):
        assert is_same_day(date(2024, 3, 15), datetime(2024, 3, 15, 12))

    def test_different_days(self):
        assert not is_same_day(date(2024, 3, 15), date(2024, 3, 16))


class TestDayOfWeek:
    @pytest.mark.parametrize("day,token", [
        (date(2024, 3, 11), "mon"),
        (date(2024, 3, 12), "tue"),
        (date(2024, 3, 13), "wed"),
        (date(2024, 3, 14), "thu"),
        (date(2024, 3, 15), "fri"),
        (date(2024, 3, 16), "sat"),
        (date(2024, 3, 17), "sun"),
    ])
    def test_tokens(self, day, token):
        assert day_of_week(day) == token

    def test_label(self):
        assert weekday_label(date(2024, 3, 17)) == "Sun"

    def test_non_date_raises_invalid_input(self):
        with pytest.raises(InvalidInput):
            day_of_week("2024-03-15")


class TestLastDayOfMonth:
    @pytest.mark.parametrize("day,expected", [
        (date(2024, 2, 29), True),    # leap year
        (date(2024, 2, 28), False),
        (date(2023, 2, 28), True),
        (date(2024, 1, 31), True),
        (date(2024, 4, 30), True),
        (date(2024, 4, 29), False),
        (date(2024, 12, 31), True),
    ])
    def test_month_ends(self, day, expected):
        assert is_last_day_of_month(day) is expected


class TestEnumerateDays:
    def test_inclusive_ascending(self):
        days = enumerate_days(date(2024, 2, 27), date(2024, 3, 2))
        assert days == [
            date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29),
            date(2024, 3, 1), date(2024, 3, 2),
        ]

    def test_single_day(self):
        assert enumerate_days(date(2024, 3, 1), date(2024, 3, 1)) == [date(2024, 3, 1)]

    def test_reversed_is_empty(self):
        assert enumerate_days(date(2024, 3, 2), date(2024, 3, 1)) == []

    def test_day_count(self):
        assert day_count(date(2024, 1, 1), date(2024, 1, 31)) == 31
        assert day_count(date(2024, 1, 2), date(2024, 1, 1)) == 0

    def test_ensure_range(self):
        ensure_range(date(2024, 1, 1), date(2024, 1, 1))
        with pytest.raises(InvalidDateRange):
            ensure_range(date(2024, 1, 2), date(2024, 1, 1))


class TestIsoDates:
    @pytest.mark.parametrize("text", ["2024-01-01", "2024-02-29", "1999-12-31", "2030-07-04"])
    def test_round_trip(self, text):
        assert format_iso_date(parse_iso_date(text)) == text

    @pytest.mark.parametrize("text", [
        "2024-13-01", "2023-02-29", "2024-1-1", "20240101", "not-a-date", "", "2024-01-01T10:00",
    ])
    def test_malformed_raises_data_error(self, text):
        with pytest.raises(DataError) as exc:
            parse_iso_date(text, field="log_date")
        assert exc.value.details["field"] == "log_date"

    def test_format_uses_own_calendar_fields(self):
        # 23:30 at UTC-5 is already the next day in UTC; the date must not shift.
        late = datetime(2024, 3, 15, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert format_iso_date(late) == "2024-03-15"

    def test_as_date_accepts_all_forms(self):
        assert as_date("2024-03-15") == date(2024, 3, 15)
        assert as_date(date(2024, 3, 15)) == date(2024, 3, 15)
        assert as_date(datetime(2024, 3, 15, 8)) == date(2024, 3, 15)

    def test_as_date_rejects_other_types(self):
        with pytest.raises(DataError):
            as_date(20240315)

    def test_parse_timestamp(self):
        ts = parse_timestamp("2024-03-15T07:45:00+00:00")
        assert ts.hour == 7 and ts.tzinfo is not None

    def test_parse_timestamp_malformed(self):
        with pytest.raises(DataError):
            parse_timestamp("yesterday morning")
