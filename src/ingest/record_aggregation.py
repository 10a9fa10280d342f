"""Ordered aggregation of per-source roadmap items.

This module keeps one segment per source kind and concatenates them
into the current load. Segments are replaced wholesale; no sorting or
deduplication happens here.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, Mapping

from core.constants import DEFAULT_PREVIEW_LIMIT
from core.errors import RoadmapInputError
from core.logging_config import get_logger
from core.types import RoadmapItem

_LOGGER = get_logger(__name__)


class SourceKind(str, Enum):
    """Source segments in load order."""

    PULL_REQUESTS = "pull_requests"
    ISSUES = "issues"
    COMMITS = "commits"
    SPREADSHEET = "spreadsheet"


SEGMENT_ORDER: tuple[SourceKind, ...] = (
    SourceKind.PULL_REQUESTS,
    SourceKind.ISSUES,
    SourceKind.COMMITS,
    SourceKind.SPREADSHEET,
)


@dataclass(frozen=True)
class AggregatedRoadmap:
    """Immutable set of per-source segments for one load.

    Attributes:
        segments: Items per source kind in mapper output order.
    """

    segments: Mapping[SourceKind, tuple[RoadmapItem, ...]] = field(default_factory=dict)

    @property
    def items(self) -> tuple[RoadmapItem, ...]:
        """Concatenate segments in fixed source order."""
        return tuple(
            item for kind in SEGMENT_ORDER for item in self.segments.get(kind, ())
        )

    def segment(self, kind: SourceKind) -> tuple[RoadmapItem, ...]:
        """Return the items contributed by one source kind."""
        return self.segments.get(kind, ())

    def with_segment(self, kind: SourceKind, items: Iterable[RoadmapItem]) -> "AggregatedRoadmap":
        """Return a copy with one source segment fully replaced.

        Args:
            kind: Source kind to replace.
            items: New items for that source.

        Returns:
            New aggregate; other segments are untouched.
        """
        updated_segments = dict(self.segments)
        updated_segments[kind] = tuple(items)
        aggregate = replace(self, segments=updated_segments)
        _warn_on_duplicate_ids(aggregate.items)
        return aggregate

    def with_mapped_segment(
        self,
        kind: SourceKind,
        mapper: Callable[..., list[RoadmapItem]],
        raw_records: object,
        now: datetime | None = None,
    ) -> "AggregatedRoadmap":
        """Map raw records and replace one segment atomically.

        Args:
            kind: Source kind to replace.
            mapper: Batch mapper for that source kind, called with the raw
                records and a ``now`` keyword.
            raw_records: Raw collection for the mapper.
            now: Ingestion instant.

        Returns:
            New aggregate with the mapped segment.

        Raises:
            RoadmapInputError: If the raw collection is invalid; the current
                aggregate is left as it was.
        """
        mapped_items = mapper(raw_records, now=now)
        return self.with_segment(kind, mapped_items)

    def preview(self, limit: int = DEFAULT_PREVIEW_LIMIT) -> tuple[RoadmapItem, ...]:
        """Return the first items of the load for list display.

        Args:
            limit: Maximum item count.

        Returns:
            Leading items in load order.

        Raises:
            RoadmapInputError: If limit is negative.
        """
        if limit < 0:
            raise RoadmapInputError(f"Invalid preview limit {limit}: expected zero or more.")
        return self.items[:limit]

    def __len__(self) -> int:
        return sum(len(rows) for rows in self.segments.values())


def aggregate_records(
    pull_requests: Iterable[RoadmapItem] | None = None,
    issues: Iterable[RoadmapItem] | None = None,
    commits: Iterable[RoadmapItem] | None = None,
    spreadsheet_rows: Iterable[RoadmapItem] | None = None,
) -> AggregatedRoadmap:
    """Build an aggregate from per-source item lists.

    Args:
        pull_requests: Mapped pull request items.
        issues: Mapped issue items.
        commits: Mapped commit items.
        spreadsheet_rows: Mapped spreadsheet items.

    Returns:
        Aggregate ordered pull requests, issues, commits, spreadsheet rows.
    """
    segments = {
        SourceKind.PULL_REQUESTS: tuple(pull_requests or ()),
        SourceKind.ISSUES: tuple(issues or ()),
        SourceKind.COMMITS: tuple(commits or ()),
        SourceKind.SPREADSHEET: tuple(spreadsheet_rows or ()),
    }
    aggregate = AggregatedRoadmap(segments=segments)
    _warn_on_duplicate_ids(aggregate.items)
    return aggregate


def _warn_on_duplicate_ids(items: tuple[RoadmapItem, ...]) -> None:
    seen_ids: set[str] = set()
    duplicate_ids: list[str] = []
    for item in items:
        if item.item_id in seen_ids:
            duplicate_ids.append(item.item_id)
        seen_ids.add(item.item_id)
    if duplicate_ids:
        _LOGGER.warning("duplicate_item_ids", item_ids=sorted(set(duplicate_ids)))
