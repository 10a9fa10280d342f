"""Roadmap data persistence.

This module stores the aggregated load, the spreadsheet column mapping,
and the names of the last loaded GitHub files as JSON documents under
the configured data root. Documents are stored and returned unchanged.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.column_mapping import column_mapping_from_dict, default_column_mapping
from core.config import RoadmapConfig
from core.constants import (
    COLUMN_MAPPING_FILE_NAME,
    GITHUB_FILES_FILE_NAME,
    ROADMAP_DATA_FILE_NAME,
)
from core.errors import RoadmapConfigError, RoadmapStoreError
from core.logging_config import get_logger
from core.timestamps import format_timestamp, utc_now
from core.types import ColumnMapping, RoadmapSnapshot
from store.item_payload import snapshot_from_payload, snapshot_to_payload

_LOGGER = get_logger(__name__)


class RoadmapStore:
    """JSON-file store for roadmap documents.

    Each document lives in its own file so replacing one never touches
    the others.
    """

    def __init__(self, config: RoadmapConfig) -> None:
        """Initialize the store from config.

        Args:
            config: Runtime configuration.
        """
        self._data_root = config.data_root

    def save_snapshot(self, snapshot: RoadmapSnapshot) -> Path:
        """Persist the aggregated load, replacing any previous one.

        Args:
            snapshot: Aggregated items plus update time.

        Returns:
            Path of the written document.
        """
        snapshot_path = self._data_root / ROADMAP_DATA_FILE_NAME
        _write_json(snapshot_path, snapshot_to_payload(snapshot))
        _LOGGER.info(
            "roadmap_snapshot_saved",
            item_count=len(snapshot.items),
            path=str(snapshot_path),
        )
        return snapshot_path

    def load_snapshot(self) -> RoadmapSnapshot | None:
        """Load the stored aggregated load.

        Returns:
            Stored snapshot, or None when nothing has been saved.

        Raises:
            RoadmapStoreError: If the stored document is invalid.
        """
        payload = _read_json(self._data_root / ROADMAP_DATA_FILE_NAME)
        if payload is None:
            return None
        return snapshot_from_payload(payload)

    def save_column_mapping(self, mapping: ColumnMapping) -> None:
        """Persist the spreadsheet column mapping."""
        _write_json(self._data_root / COLUMN_MAPPING_FILE_NAME, mapping.as_dict())

    def load_column_mapping(self) -> ColumnMapping:
        """Load the stored column mapping.

        Returns:
            Stored mapping, or the default mapping when none is saved.

        Raises:
            RoadmapStoreError: If the stored mapping is invalid.
        """
        mapping_path = self._data_root / COLUMN_MAPPING_FILE_NAME
        payload = _read_json(mapping_path)
        if payload is None:
            return default_column_mapping()
        try:
            return column_mapping_from_dict(payload, f"stored column mapping at {mapping_path}")
        except RoadmapConfigError as error:
            raise RoadmapStoreError(str(error)) from error

    def save_github_files(
        self,
        pull_requests_name: str | None,
        issues_name: str | None,
    ) -> None:
        """Record names of the GitHub export files used for the last load.

        Args:
            pull_requests_name: Pull request export file name, if loaded.
            issues_name: Issue export file name, if loaded.
        """
        loaded_at = format_timestamp(utc_now())
        payload = {
            "prs": _file_entry(pull_requests_name, loaded_at),
            "issues": _file_entry(issues_name, loaded_at),
        }
        _write_json(self._data_root / GITHUB_FILES_FILE_NAME, payload)

    def load_github_files(self) -> dict[str, Any]:
        """Return stored GitHub file entries, empty entries when unset."""
        payload = _read_json(self._data_root / GITHUB_FILES_FILE_NAME)
        if not isinstance(payload, dict):
            return {"prs": None, "issues": None}
        return payload

    def clear(self) -> None:
        """Delete every stored roadmap document."""
        for file_name in (ROADMAP_DATA_FILE_NAME, COLUMN_MAPPING_FILE_NAME, GITHUB_FILES_FILE_NAME):
            (self._data_root / file_name).unlink(missing_ok=True)
        _LOGGER.info("roadmap_store_cleared", data_root=str(self._data_root))


def _file_entry(file_name: str | None, loaded_at: str) -> dict[str, str] | None:
    if not file_name:
        return None
    return {"name": file_name, "lastLoaded": loaded_at}


def _write_json(document_path: Path, payload: object) -> None:
    """Write one JSON document, creating the data root when needed.

    Raises:
        RoadmapStoreError: If the file cannot be written.
    """
    try:
        document_path.parent.mkdir(parents=True, exist_ok=True)
        document_path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as error:
        raise RoadmapStoreError(
            f"Failed to write roadmap data at {document_path}: {error}. "
            "Check ROADMAP_DATA_ROOT permissions."
        ) from error


def _read_json(document_path: Path) -> object | None:
    """Read one JSON document.

    Returns:
        Decoded payload, or None when the file does not exist.

    Raises:
        RoadmapStoreError: If the file is not valid JSON.
    """
    if not document_path.exists():
        return None
    try:
        return json.loads(document_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise RoadmapStoreError(
            f"Failed to parse roadmap data at {document_path}: {error.msg}. "
            "Run 'roadmap reset' and ingest again."
        ) from error
