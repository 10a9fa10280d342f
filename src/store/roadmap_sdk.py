"""Python SDK for roadmap operations.

This module exposes high-level APIs for ingest, timeline grouping,
previews, and column mapping management backed by the roadmap store.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from core.config import RoadmapConfig
from core.types import ColumnMapping, GroupingTree, IngestOptions, RoadmapItem, RoadmapSnapshot
from ingest.input_reader import read_spreadsheet_columns
from ingest.pipeline import ingest_roadmap
from store.roadmap_store import RoadmapStore
from transforms.time_grouping import group_by_time


class RoadmapClient:
    """Primary SDK entry point for roadmap workflows."""

    def __init__(self, config: RoadmapConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or RoadmapConfig.from_env()
        self._store = RoadmapStore(self._config)

    @property
    def config(self) -> RoadmapConfig:
        """Runtime configuration used by this client."""
        return self._config

    def ingest(self, options: IngestOptions) -> RoadmapSnapshot:
        """Load sources, aggregate them, and persist the result.

        Args:
            options: Ingest options.

        Returns:
            Persisted snapshot.

        Raises:
            RoadmapInputError: If a source cannot be read.
            RoadmapStoreError: If persistence fails.
        """
        return ingest_roadmap(options, self._config)

    def load_snapshot(self) -> RoadmapSnapshot | None:
        """Return the persisted load, or None before the first ingest."""
        return self._store.load_snapshot()

    def items(self) -> tuple[RoadmapItem, ...]:
        """Return persisted items in load order."""
        snapshot = self._store.load_snapshot()
        return snapshot.items if snapshot else ()

    def timeline(self, now: datetime | None = None) -> GroupingTree:
        """Group persisted items by year, month, day, and category.

        Args:
            now: Optional reference time for month ``is_past`` hints.

        Returns:
            Grouping tree, empty when nothing is stored.
        """
        return group_by_time(self.items(), now)

    def preview(self, limit: int | None = None) -> tuple[RoadmapItem, ...]:
        """Return leading persisted items for list display.

        Args:
            limit: Maximum count; config preview limit when omitted.

        Returns:
            Leading items in load order.
        """
        row_limit = self._config.preview_limit if limit is None else limit
        return self.items()[: max(row_limit, 0)]

    def column_mapping(self) -> ColumnMapping:
        """Return the stored spreadsheet column mapping."""
        return self._store.load_column_mapping()

    def set_column_mapping(self, mapping: ColumnMapping) -> None:
        """Persist a spreadsheet column mapping."""
        self._store.save_column_mapping(mapping)

    def spreadsheet_columns(self, source_path: str) -> tuple[str, ...]:
        """Return header columns of a spreadsheet for mapping choices."""
        return read_spreadsheet_columns(source_path, self._config.max_file_size_mb)

    def reset(self) -> None:
        """Delete all persisted roadmap data."""
        self._store.clear()

    def with_data_root(self, data_root: str) -> "RoadmapClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return RoadmapClient(replace(self._config, data_root=resolved_root))
