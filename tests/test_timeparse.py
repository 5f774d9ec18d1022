import pytest

from availability_blocks.models import TimeRange
from availability_blocks.timeparse import (
    find_time_range,
    format_minutes,
    format_range,
    iter_time_ranges,
    parse_clock_token,
    parse_time_range,
)


class TestParseClockToken:
    def test_12h(self):
        assert parse_clock_token("7AM") == 420
        assert parse_clock_token("11:30 PM") == 1410
        assert parse_clock_token("11:30pm") == 1410
        assert parse_clock_token("7 a.m.") == 420

    def test_noon_and_midnight(self):
        assert parse_clock_token("12AM") == 0
        assert parse_clock_token("12:15 am") == 15
        assert parse_clock_token("12PM") == 720

    def test_24h(self):
        assert parse_clock_token("18:30") == 1110
        assert parse_clock_token("7") == 420
        assert parse_clock_token("24:00") == 1440

    def test_out_of_range(self):
        assert parse_clock_token("13PM") is None
        assert parse_clock_token("0AM") is None
        assert parse_clock_token("7:60") is None
        assert parse_clock_token("25:00") is None
        assert parse_clock_token("24:30") is None

    def test_no_match(self):
        assert parse_clock_token("Timestamp") is None
        assert parse_clock_token("") is None
        assert parse_clock_token(None) is None


class TestParseTimeRange:
    def test_hour_only(self):
        assert parse_time_range("7AM - 10AM") == TimeRange(420, 600)
        assert parse_time_range("8AM-10AM") == TimeRange(480, 600)

    def test_minutes(self):
        assert parse_time_range("1PM - 4:30PM") == TimeRange(780, 990)
        assert parse_time_range("6PM - 7:15PM") == TimeRange(1080, 1155)

    def test_24h_en_dash(self):
        assert parse_time_range("18:30–21:00") == TimeRange(1110, 1260)

    def test_extra_whitespace(self):
        assert parse_time_range("  7 AM   -   10 AM ") == TimeRange(420, 600)

    def test_overnight_rejected(self):
        assert parse_time_range("11PM - 1AM") is None

    def test_empty_range_rejected(self):
        assert parse_time_range("10AM - 10AM") is None

    def test_more_than_one_separator(self):
        assert parse_time_range("7AM - 10AM - 1PM") is None

    def test_no_match(self):
        assert parse_time_range("Thursday, October 2") is None
        assert parse_time_range("Full-name") is None
        assert parse_time_range("") is None


class TestFindTimeRange:
    def test_inside_line(self):
        rng, rest = find_time_range("Thursday, October 2 7AM - 10AM")
        assert rng == TimeRange(420, 600)
        assert rest == "Thursday, October 2"

    def test_none(self):
        assert find_time_range("Sunday, October 5 CLASS") is None

    def test_overlapping_matches(self):
        found = list(iter_time_ranges("Thursday, October 2 - 7AM - 10AM"))
        assert found == [
            (TimeRange(120, 420), "Thursday, October - 10AM"),
            (TimeRange(420, 600), "Thursday, October 2 -"),
        ]


class TestFormat:
    def test_format_minutes(self):
        assert format_minutes(540) == "9:00 AM"
        assert format_minutes(0) == "12:00 AM"
        assert format_minutes(720) == "12:00 PM"
        assert format_minutes(1155) == "7:15 PM"
        assert format_minutes(1110, twelve_hour=False) == "18:30"

    def test_format_minutes_invalid(self):
        with pytest.raises(ValueError):
            format_minutes(1441)

    def test_format_range(self):
        assert format_range(420, 600) == "7:00 AM – 10:00 AM"
        assert format_range(420, 600, twelve_hour=False) == "07:00–10:00"
