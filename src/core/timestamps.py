"""Timestamp parsing and formatting helpers.

All roadmap dates are interpreted and rendered in UTC. Naive inputs are
treated as UTC so every mapper buckets the same instant the same way.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone

_FALLBACK_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%Y.%m.%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%Y年%m月%d日",
)


def utc_now() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: object) -> datetime | None:
    """Parse a raw timestamp value into an aware UTC datetime.

    Args:
        value: ISO-8601 text, a common spreadsheet date string, or a
            ``datetime``/``date`` cell value.

    Returns:
        Parsed UTC datetime, or None when the value is empty or unparseable.
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return _as_utc(datetime.fromisoformat(iso_text))
    except ValueError:
        pass
    for date_format in _FALLBACK_DATE_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, date_format))
        except ValueError:
            continue
    return None


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC string.

    Args:
        moment: Aware or naive datetime; naive values are taken as UTC.

    Returns:
        ISO-8601 text such as ``2024-01-05T00:00:00+00:00``.
    """
    return _as_utc(moment).isoformat()


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
