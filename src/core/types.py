"""Shared typed models.

This module defines immutable data models used by ingest, grouping,
store, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping


class ItemSource(str, Enum):
    """Provenance tag of a roadmap item."""

    GITHUB = "github"
    CSV = "csv"


class ItemStatus(str, Enum):
    """Fixed status vocabulary of roadmap items.

    Values are the display strings stored on items, so ``IN_PROGRESS`` is
    ``"In Progress"``.
    """

    OPEN = "Open"
    CLOSED = "Closed"
    MERGED = "Merged"
    IN_PROGRESS = "In Progress"
    BACKLOG = "Backlog"
    COMPLETED = "Completed"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class RoadmapItem:
    """Canonical roadmap item built from any source record.

    Attributes:
        item_id: Identifier unique within one load, e.g. ``gh-pr-7``.
        source: Provenance tag.
        source_id: Human-readable external reference, e.g. ``GH-7``.
        title: Item title, empty when absent upstream.
        status: Normalized status text.
        assignee: Assignee login or name, empty when none.
        date: ISO-8601 UTC timestamp used for timeline grouping.
        category: Category label used inside day buckets.
        description: Optional free text body.
        url: Optional link to the upstream record.
    """

    item_id: str
    source: ItemSource
    source_id: str
    title: str
    status: str
    assignee: str
    date: str
    category: str
    description: str = ""
    url: str = ""


@dataclass(frozen=True)
class ColumnMapping:
    """Spreadsheet columns feeding each canonical field.

    Attributes:
        title: Column holding the item title.
        status: Column holding free-text status.
        assignee: Column holding the assignee.
        date: Column holding the item date.
    """

    title: str | None = None
    status: str | None = None
    assignee: str | None = None
    date: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        """Return the mapping as a plain field-to-column dictionary."""
        return {
            "title": self.title,
            "status": self.status,
            "assignee": self.assignee,
            "date": self.date,
        }


@dataclass(frozen=True)
class SpreadsheetTable:
    """Decoded spreadsheet rows plus the raw header columns.

    Attributes:
        rows: Row mappings keyed by header column.
        columns: Header columns in file order.
    """

    rows: tuple[Mapping[str, object], ...]
    columns: tuple[str, ...]


@dataclass(frozen=True)
class RoadmapSnapshot:
    """Aggregated load handed to persistence.

    Attributes:
        items: Aggregated items in load order.
        last_updated: UTC time of the load.
    """

    items: tuple[RoadmapItem, ...]
    last_updated: datetime


@dataclass(frozen=True)
class IngestOptions:
    """Ingest command options.

    Attributes:
        pull_requests_path: Optional GitHub pull request JSON export.
        issues_path: Optional GitHub issue JSON export.
        commits_path: Optional commit JSON export.
        spreadsheet_path: Optional CSV or XLSX roadmap file.
        column_mapping: Optional column mapping; stored mapping if omitted.
    """

    pull_requests_path: str | None = None
    issues_path: str | None = None
    commits_path: str | None = None
    spreadsheet_path: str | None = None
    column_mapping: ColumnMapping | None = None


@dataclass(frozen=True)
class DayBucket:
    """Items of one day partitioned by category.

    Attributes:
        day: Zero-padded day of month key.
        categories: Category to items, in first-occurrence order.
    """

    day: str
    categories: Mapping[str, tuple[RoadmapItem, ...]] = field(default_factory=dict)

    def items(self) -> tuple[RoadmapItem, ...]:
        """Return all items of the day in category order."""
        return tuple(item for rows in self.categories.values() for item in rows)


@dataclass(frozen=True)
class MonthBucket:
    """Days of one calendar month.

    Attributes:
        year: Calendar year.
        month: Calendar month, 1-12.
        is_past: Whether the month has started relative to the grouping time.
        days: Day key to day bucket, ascending.
    """

    year: int
    month: int
    is_past: bool
    days: Mapping[str, DayBucket] = field(default_factory=dict)

    def items(self) -> tuple[RoadmapItem, ...]:
        """Return all items of the month in day then category order."""
        return tuple(item for day in self.days.values() for item in day.items())


@dataclass(frozen=True)
class YearBucket:
    """Months of one calendar year.

    Attributes:
        year: Calendar year.
        months: Month key to month bucket, ascending.
    """

    year: int
    months: Mapping[str, MonthBucket] = field(default_factory=dict)


@dataclass(frozen=True)
class GroupingTree:
    """Read-only year, month, day, and category projection of a load.

    Attributes:
        years: Year key to year bucket, ascending.
    """

    years: Mapping[str, YearBucket] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """Return whether the tree holds no items."""
        return not self.years
