"""Tests for time, TLE and distance helpers."""

import math
from datetime import datetime, timezone

import pytest

from n2yo import calculate_distance, get_all_categories, split_tle, timestamp_to_datetime
from n2yo._time import format_timestamp, resolve_timezone


class TestSplitTle:
    def test_valid(self):
        assert split_tle("line one\r\nline two") == ("line one", "line two")

    def test_missing_crlf(self):
        with pytest.raises(ValueError, match="separated"):
            split_tle("line one\nline two")

    def test_too_many_lines(self):
        with pytest.raises(ValueError, match="exactly two"):
            split_tle("a\r\nb\r\nc")


class TestTimestampToDatetime:
    def test_epoch(self):
        assert timestamp_to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_known_value(self):
        assert timestamp_to_datetime(1672531200) == datetime(2023, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("ts", [math.nan, math.inf, "123", None])
    def test_invalid(self, ts):
        with pytest.raises(TypeError):
            timestamp_to_datetime(ts)


class TestFormatTimestamp:
    def test_utc(self):
        assert format_timestamp(1672531200) == "2023-01-01 00:00:00"

    def test_utc_case_insensitive(self):
        assert format_timestamp(1672531200, "utc") == "2023-01-01 00:00:00"

    def test_named_zone(self):
        assert format_timestamp(1672531200, "America/New_York") == "2022-12-31 19:00:00"

    def test_unknown_zone_matches_utc(self):
        messages = []
        result = format_timestamp(1672531200, "Nowhere/Special", messages.append)
        assert result == format_timestamp(1672531200, "UTC")
        assert len(messages) == 1

    def test_resolve_timezone_fallback(self):
        assert resolve_timezone("Not a zone", lambda m: None) is timezone.utc


class TestCalculateDistance:
    def test_same_point(self):
        assert calculate_distance(40.0, -75.0, 40.0, -75.0) == 0.0

    def test_quarter_equator(self):
        assert calculate_distance(0.0, 0.0, 0.0, 90.0) == pytest.approx(10007.54, abs=0.1)

    def test_symmetric(self):
        a = calculate_distance(42.44, -76.5, 51.5, -0.12)
        b = calculate_distance(51.5, -0.12, 42.44, -76.5)
        assert a == pytest.approx(b)


class TestCategories:
    def test_all_categories_sorted(self):
        cats = get_all_categories()
        assert cats[0] == (1, "Brightest")
        assert cats[-1] == (56, "Kuiper")
        assert len(cats) == 56
