"""Unit tests for time helpers."""

from __future__ import annotations

from datetime import date

import pytest

from markstats.helpers.time_helper import parse_calendar_date


class TestParseCalendarDate:
    @pytest.mark.unit
    def test_plain_iso_date(self) -> None:
        assert parse_calendar_date("2020-05-01") == date(2020, 5, 1)

    @pytest.mark.unit
    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_calendar_date(" 1999-12-31 ") == date(1999, 12, 31)

    @pytest.mark.unit
    def test_datetime_with_z_suffix(self) -> None:
        assert parse_calendar_date("2021-03-04T10:00:00Z") == date(2021, 3, 4)

    @pytest.mark.unit
    def test_datetime_with_offset(self) -> None:
        assert parse_calendar_date("2021-03-04T23:30:00+02:00") == date(2021, 3, 4)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["not-a-date", "2020-13-01", "01/05/2020"])
    def test_unparsable_raises(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_calendar_date(value)
