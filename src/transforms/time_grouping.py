"""Timeline grouping of aggregated roadmap items.

This module projects a load into year, month, day, and category buckets
for rendering. Calendar fields come from the UTC date of each item.
Bucket keys ascend; categories keep first-occurrence order and items
keep load order inside a category.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from core.constants import DEFAULT_CATEGORY
from core.logging_config import get_logger
from core.timestamps import parse_timestamp, utc_now
from core.types import DayBucket, GroupingTree, MonthBucket, RoadmapItem, YearBucket

_LOGGER = get_logger(__name__)

_CalendarKey = tuple[str, str, str]


def group_by_time(items: Iterable[RoadmapItem], now: datetime | None = None) -> GroupingTree:
    """Build the grouping tree for a load.

    Args:
        items: Aggregated items in load order.
        now: Reference instant for the month ``is_past`` hint.

    Returns:
        Fully rebuilt grouping tree; empty when there are no items.
    """
    reference_time = parse_timestamp(now) or utc_now()
    day_partitions = _partition_by_day(items, reference_time)
    years: dict[str, YearBucket] = {}
    for year_key in sorted({key[0] for key in day_partitions}):
        months: dict[str, MonthBucket] = {}
        month_keys = sorted({key[1] for key in day_partitions if key[0] == year_key})
        for month_key in month_keys:
            day_keys = sorted(
                key[2] for key in day_partitions if key[0] == year_key and key[1] == month_key
            )
            months[month_key] = MonthBucket(
                year=int(year_key),
                month=int(month_key),
                is_past=_is_month_past(int(year_key), int(month_key), reference_time),
                days={
                    day_key: DayBucket(
                        day=day_key,
                        categories=day_partitions[(year_key, month_key, day_key)],
                    )
                    for day_key in day_keys
                },
            )
        years[year_key] = YearBucket(year=int(year_key), months=months)
    return GroupingTree(years=years)


def calendar_key(item: RoadmapItem, now: datetime | None = None) -> _CalendarKey:
    """Return zero-padded UTC year, month, and day keys for an item.

    Args:
        item: Roadmap item.
        now: Instant used when the stored date is unparseable.

    Returns:
        Tuple such as ``("2024", "01", "05")``.
    """
    moment = parse_timestamp(item.date)
    if moment is None:
        _LOGGER.warning("item_date_unparseable", item_id=item.item_id, date=item.date)
        moment = now or utc_now()
    return (f"{moment.year:04d}", f"{moment.month:02d}", f"{moment.day:02d}")


def _partition_by_day(
    items: Iterable[RoadmapItem],
    reference_time: datetime,
) -> dict[_CalendarKey, dict[str, tuple[RoadmapItem, ...]]]:
    """Stable partition of items into day and category buckets."""
    partitions: dict[_CalendarKey, dict[str, list[RoadmapItem]]] = {}
    for item in items:
        key = calendar_key(item, reference_time)
        categories = partitions.setdefault(key, {})
        categories.setdefault(item.category or DEFAULT_CATEGORY, []).append(item)
    return {
        key: {category: tuple(rows) for category, rows in categories.items()}
        for key, categories in partitions.items()
    }


def _is_month_past(year: int, month: int, reference_time: datetime) -> bool:
    """Return whether the month starts before the reference instant."""
    month_start = datetime(year, month, 1, tzinfo=timezone.utc)
    return month_start < reference_time
