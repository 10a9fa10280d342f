"""Ingest orchestration for roadmap loads.

This module coordinates file reading, per-source mapping, aggregation,
and snapshot persistence. Each source is mapped completely before it
joins the aggregate, so a failing source never leaves a partial segment.
"""

from __future__ import annotations

from datetime import datetime
from functools import partial
from pathlib import Path

from core.config import RoadmapConfig
from core.logging_config import get_logger
from core.timestamps import utc_now
from core.types import ColumnMapping, IngestOptions, RoadmapItem, RoadmapSnapshot
from ingest.field_mapping import (
    map_commits,
    map_issues,
    map_pull_requests,
    map_spreadsheet_rows,
)
from ingest.input_reader import read_github_records, read_spreadsheet
from ingest.record_aggregation import AggregatedRoadmap, SourceKind
from store.roadmap_store import RoadmapStore

_LOGGER = get_logger(__name__)


class RoadmapIngestRunner:
    """Runner for one roadmap load."""

    def __init__(self, options: IngestOptions, config: RoadmapConfig) -> None:
        self._options = options
        self._config = config
        self._store = RoadmapStore(config)

    def run(self) -> RoadmapSnapshot:
        """Execute the load and persist the aggregated snapshot."""
        ingested_at = utc_now()
        aggregate = self.build_aggregate(ingested_at)
        snapshot = RoadmapSnapshot(items=aggregate.items, last_updated=ingested_at)
        self._store.save_snapshot(snapshot)
        column_mapping = self._resolve_column_mapping()
        self._store.save_column_mapping(column_mapping)
        if self._options.pull_requests_path or self._options.issues_path:
            self._store.save_github_files(
                _file_name(self._options.pull_requests_path),
                _file_name(self._options.issues_path),
            )
        _log_ingest_completion(self._options, aggregate)
        return snapshot

    def build_aggregate(self, ingested_at: datetime) -> AggregatedRoadmap:
        """Read and map every configured source into one aggregate.

        Args:
            ingested_at: Ingestion instant shared by all sources.

        Returns:
            Aggregate with one segment per configured source.

        Raises:
            RoadmapInputError: If any configured source is unreadable.
        """
        aggregate = AggregatedRoadmap()
        max_size = self._config.max_file_size_mb
        github_sources = (
            (SourceKind.PULL_REQUESTS, self._options.pull_requests_path, map_pull_requests),
            (SourceKind.ISSUES, self._options.issues_path, map_issues),
            (SourceKind.COMMITS, self._options.commits_path, map_commits),
        )
        for kind, source_path, mapper in github_sources:
            if not source_path:
                continue
            raw_records = read_github_records(source_path, max_size)
            aggregate = aggregate.with_mapped_segment(kind, mapper, raw_records, ingested_at)
        if self._options.spreadsheet_path:
            table = read_spreadsheet(self._options.spreadsheet_path, max_size)
            spreadsheet_mapper = partial(
                _map_spreadsheet_table,
                column_mapping=self._resolve_column_mapping(),
                unmatched_status=self._config.unmatched_status,
            )
            aggregate = aggregate.with_mapped_segment(
                SourceKind.SPREADSHEET, spreadsheet_mapper, table.rows, ingested_at
            )
        return aggregate

    def _resolve_column_mapping(self) -> ColumnMapping:
        if self._options.column_mapping is not None:
            return self._options.column_mapping
        return self._store.load_column_mapping()


def ingest_roadmap(options: IngestOptions, config: RoadmapConfig) -> RoadmapSnapshot:
    """Run one roadmap load and persist its snapshot.

    Args:
        options: Ingest request options.
        config: Runtime configuration.

    Returns:
        Persisted snapshot.

    Raises:
        RoadmapInputError: If a source file is missing or malformed.
        RoadmapStoreError: If persistence fails.
    """
    runner = RoadmapIngestRunner(options, config)
    return runner.run()


def _map_spreadsheet_table(
    rows: object,
    now: datetime | None,
    column_mapping: ColumnMapping,
    unmatched_status: str,
) -> list[RoadmapItem]:
    return map_spreadsheet_rows(rows, column_mapping, now, unmatched_status)


def _file_name(source_path: str | None) -> str | None:
    return Path(source_path).name if source_path else None


def _log_ingest_completion(options: IngestOptions, aggregate: AggregatedRoadmap) -> None:
    """Log load completion with per-source counts."""
    _LOGGER.info(
        "roadmap_ingest_completed",
        pull_requests_path=options.pull_requests_path,
        issues_path=options.issues_path,
        commits_path=options.commits_path,
        spreadsheet_path=options.spreadsheet_path,
        pull_request_count=len(aggregate.segment(SourceKind.PULL_REQUESTS)),
        issue_count=len(aggregate.segment(SourceKind.ISSUES)),
        commit_count=len(aggregate.segment(SourceKind.COMMITS)),
        spreadsheet_count=len(aggregate.segment(SourceKind.SPREADSHEET)),
        item_count=len(aggregate),
    )
