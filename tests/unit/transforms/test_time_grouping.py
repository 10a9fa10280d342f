"""Unit tests for timeline grouping."""

from __future__ import annotations

from datetime import datetime, timezone

from core.types import ItemSource, RoadmapItem
from transforms.time_grouping import calendar_key, group_by_time

NOW = datetime(2024, 2, 15, tzinfo=timezone.utc)


def _item(item_id: str, date: str, category: str = "Roadmap") -> RoadmapItem:
    return RoadmapItem(
        item_id=item_id,
        source=ItemSource.CSV,
        source_id=item_id.upper(),
        title=item_id,
        status="Backlog",
        assignee="",
        date=date,
        category=category,
    )


def test_group_by_time_builds_day_buckets() -> None:
    """Two days in one month should share year and month buckets."""
    tree = group_by_time(
        [_item("a", "2024-01-20T00:00:00+00:00"), _item("b", "2024-01-05T00:00:00+00:00")],
        NOW,
    )

    month = tree.years["2024"].months["01"]

    assert list(tree.years) == ["2024"]
    assert list(month.days) == ["05", "20"]
    assert [len(day.categories["Roadmap"]) for day in month.days.values()] == [1, 1]


def test_group_by_time_sorts_years_and_months_ascending() -> None:
    """Bucket keys should ascend regardless of input order."""
    tree = group_by_time(
        [
            _item("a", "2025-03-01T00:00:00+00:00"),
            _item("b", "2023-11-02T00:00:00+00:00"),
            _item("c", "2025-01-09T00:00:00+00:00"),
        ],
        NOW,
    )

    assert list(tree.years) == ["2023", "2025"]
    assert list(tree.years["2025"].months) == ["01", "03"]


def test_group_by_time_keeps_category_first_occurrence_order() -> None:
    """Categories should follow first occurrence and items keep load order."""
    date = "2024-01-05T10:00:00+00:00"
    items = [
        _item("issue-1", date, "Issue"),
        _item("pr-1", date, "Pull Request"),
        _item("issue-2", date, "Issue"),
    ]

    day = group_by_time(items, NOW).years["2024"].months["01"].days["05"]

    assert list(day.categories) == ["Issue", "Pull Request"]
    assert [item.item_id for item in day.categories["Issue"]] == ["issue-1", "issue-2"]


def test_group_by_time_uses_utc_calendar() -> None:
    """Offsets should be converted to UTC before bucketing."""
    tree = group_by_time([_item("a", "2024-01-31T23:30:00-05:00")], NOW)

    assert list(tree.years["2024"].months) == ["02"]
    assert list(tree.years["2024"].months["02"].days) == ["01"]


def test_group_by_time_marks_past_months() -> None:
    """Months starting before now should be flagged as past."""
    tree = group_by_time(
        [_item("a", "2024-02-20T00:00:00+00:00"), _item("b", "2024-03-01T00:00:00+00:00")],
        NOW,
    )

    months = tree.years["2024"].months

    assert (months["02"].is_past, months["03"].is_past) == (True, False)


def test_group_by_time_defaults_empty_category() -> None:
    """Items without a category should land in the catch-all label."""
    day = group_by_time([_item("a", "2024-01-05", "")], NOW).years["2024"].months["01"].days["05"]

    assert list(day.categories) == ["Other"]


def test_group_by_time_is_repeatable() -> None:
    """Grouping the same items twice should produce identical trees."""
    items = [
        _item("a", "2024-01-05T00:00:00+00:00", "Issue"),
        _item("b", "2023-06-05T00:00:00+00:00"),
        _item("c", "2024-01-05T00:00:00+00:00"),
    ]

    assert group_by_time(items, NOW) == group_by_time(items, NOW)


def test_group_by_time_empty_input_yields_empty_tree() -> None:
    """No items should produce a tree without year keys."""
    tree = group_by_time([], NOW)

    assert tree.is_empty() and dict(tree.years) == {}


def test_month_items_flatten_days_in_order() -> None:
    """Month items should flatten days ascending then categories."""
    tree = group_by_time(
        [_item("late", "2024-01-20"), _item("early", "2024-01-05")],
        NOW,
    )

    assert [item.item_id for item in tree.years["2024"].months["01"].items()] == ["early", "late"]


def test_calendar_key_falls_back_to_reference_time() -> None:
    """An unparseable stored date should bucket at the reference time."""
    assert calendar_key(_item("a", "garbage"), NOW) == ("2024", "02", "15")
