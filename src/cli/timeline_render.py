"""Plain-text rendering of roadmap timelines and previews.

This module turns a grouping tree or a flat item list into output lines
for the CLI. It only traverses its input and never regroups items.
"""

from __future__ import annotations

from core.timestamps import parse_timestamp
from core.types import GroupingTree, ItemSource, RoadmapItem

_INDENT = "  "


def render_timeline(tree: GroupingTree) -> list[str]:
    """Render a grouping tree as indented lines.

    Args:
        tree: Grouping tree to traverse.

    Returns:
        Output lines; a single hint line when the tree is empty.
    """
    if tree.is_empty():
        return ["No roadmap data. Run 'roadmap ingest' first."]
    lines: list[str] = []
    for year_key, year_bucket in tree.years.items():
        lines.append(year_key)
        for month_key, month_bucket in year_bucket.months.items():
            label = "releases" if month_bucket.is_past else "planned releases"
            lines.append(f"{_INDENT}{year_key}-{month_key} {label}")
            for day_key, day_bucket in month_bucket.days.items():
                lines.append(f"{_INDENT * 2}{day_key}")
                for category, items in day_bucket.categories.items():
                    lines.append(f"{_INDENT * 3}{category}")
                    lines.extend(f"{_INDENT * 4}- {_item_label(item)}" for item in items)
    return lines


def render_preview(items: tuple[RoadmapItem, ...], total_count: int) -> list[str]:
    """Render a tab-separated preview table.

    Args:
        items: Leading items to show.
        total_count: Item count of the whole load.

    Returns:
        Header, one line per item, and a trailing count when truncated.
    """
    if total_count == 0:
        return ["No roadmap data. Run 'roadmap ingest' first."]
    lines = ["source\ttitle\tstatus\tassignee\tdate"]
    for item in items:
        source_label = item.source_id if item.source == ItemSource.GITHUB else "CSV"
        lines.append(
            f"{source_label}\t{item.title}\t{item.status}\t{item.assignee}\t{_short_date(item.date)}"
        )
    if total_count > len(items):
        lines.append(f"... showing {len(items)} of {total_count} items")
    return lines


def _item_label(item: RoadmapItem) -> str:
    label = f"{item.title or '(untitled)'} [{item.status}]"
    if item.assignee:
        label += f" ({item.assignee})"
    return label


def _short_date(date_text: str) -> str:
    moment = parse_timestamp(date_text)
    if moment is None:
        return "-"
    return moment.strftime("%Y-%m-%d")
