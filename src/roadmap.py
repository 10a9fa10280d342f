"""Public SDK surface for roadmap ingest.

This module provides a stable import path for SDK users.
It re-exports the primary client, pipeline functions, and typed models.
"""

from __future__ import annotations

from core.column_mapping import default_column_mapping, load_column_mapping_file
from core.config import RoadmapConfig
from core.errors import (
    RoadmapConfigError,
    RoadmapError,
    RoadmapInputError,
    RoadmapStoreError,
)
from core.types import (
    ColumnMapping,
    GroupingTree,
    IngestOptions,
    ItemSource,
    ItemStatus,
    RoadmapItem,
    RoadmapSnapshot,
)
from ingest.field_mapping import (
    map_commit,
    map_commits,
    map_issue,
    map_issues,
    map_pull_request,
    map_pull_requests,
    map_spreadsheet_row,
    map_spreadsheet_rows,
)
from ingest.record_aggregation import AggregatedRoadmap, SourceKind, aggregate_records
from ingest.status_normalization import normalize_status
from store.roadmap_sdk import RoadmapClient
from transforms.time_grouping import group_by_time

__all__ = [
    "AggregatedRoadmap",
    "ColumnMapping",
    "GroupingTree",
    "IngestOptions",
    "ItemSource",
    "ItemStatus",
    "RoadmapClient",
    "RoadmapConfig",
    "RoadmapConfigError",
    "RoadmapError",
    "RoadmapInputError",
    "RoadmapItem",
    "RoadmapSnapshot",
    "RoadmapStoreError",
    "SourceKind",
    "aggregate_records",
    "default_column_mapping",
    "group_by_time",
    "load_column_mapping_file",
    "map_commit",
    "map_commits",
    "map_issue",
    "map_issues",
    "map_pull_request",
    "map_pull_requests",
    "map_spreadsheet_row",
    "map_spreadsheet_rows",
    "normalize_status",
]
