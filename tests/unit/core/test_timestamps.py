"""Unit tests for timestamp helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from core.timestamps import format_timestamp, parse_timestamp


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("2024-01-05T10:00:00Z", datetime(2024, 1, 5, 10, tzinfo=timezone.utc)),
        ("2024-01-05", datetime(2024, 1, 5, tzinfo=timezone.utc)),
        ("2024/03/02", datetime(2024, 3, 2, tzinfo=timezone.utc)),
        ("03/02/2024", datetime(2024, 3, 2, tzinfo=timezone.utc)),
        ("Mar 2, 2024", datetime(2024, 3, 2, tzinfo=timezone.utc)),
        ("2024年3月2日", datetime(2024, 3, 2, tzinfo=timezone.utc)),
        (date(2024, 3, 2), datetime(2024, 3, 2, tzinfo=timezone.utc)),
    ],
)
def test_parse_timestamp_accepts_common_formats(raw_value: object, expected: datetime) -> None:
    """Supported formats should parse to aware UTC datetimes."""
    assert parse_timestamp(raw_value) == expected


def test_parse_timestamp_converts_offsets_to_utc() -> None:
    """Offset timestamps should be converted to UTC."""
    parsed = parse_timestamp("2024-01-31T23:30:00-05:00")

    assert parsed is not None and parsed.utcoffset() == timedelta(0) and parsed.day == 1


@pytest.mark.parametrize("raw_value", [None, "", "   ", "not a date", 45123, ["2024-01-01"]])
def test_parse_timestamp_returns_none_for_unusable_values(raw_value: object) -> None:
    """Unusable values should return None instead of raising."""
    assert parse_timestamp(raw_value) is None


def test_format_timestamp_treats_naive_values_as_utc() -> None:
    """Naive datetimes should render with a UTC offset."""
    assert format_timestamp(datetime(2024, 1, 5)) == "2024-01-05T00:00:00+00:00"
