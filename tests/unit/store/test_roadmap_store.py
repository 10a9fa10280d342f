"""Unit tests for roadmap persistence."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from core.config import RoadmapConfig
from core.errors import RoadmapStoreError
from core.types import ColumnMapping, ItemSource, RoadmapItem, RoadmapSnapshot
from store.roadmap_store import RoadmapStore


def _store(tmp_path: Path) -> RoadmapStore:
    return RoadmapStore(RoadmapConfig(data_root=tmp_path))


def _snapshot() -> RoadmapSnapshot:
    item = RoadmapItem(
        item_id="gh-pr-7",
        source=ItemSource.GITHUB,
        source_id="GH-7",
        title="Add cache",
        status="Open",
        assignee="",
        date="2024-01-05T00:00:00+00:00",
        category="Pull Request",
        url="https://example.test/pull/7",
    )
    return RoadmapSnapshot(items=(item,), last_updated=datetime(2024, 6, 1, tzinfo=timezone.utc))


def test_save_and_load_snapshot_returns_same_items(tmp_path: Path) -> None:
    """Stored snapshots should come back unchanged."""
    store = _store(tmp_path)
    snapshot = _snapshot()

    store.save_snapshot(snapshot)

    assert store.load_snapshot() == snapshot


def test_snapshot_document_uses_stored_key_names(tmp_path: Path) -> None:
    """The stored document should use id, sourceId, and lastUpdated keys."""
    store = _store(tmp_path)

    snapshot_path = store.save_snapshot(_snapshot())
    payload = json.loads(snapshot_path.read_text(encoding="utf-8"))

    assert payload["lastUpdated"] == "2024-06-01T00:00:00+00:00"
    assert (payload["items"][0]["id"], payload["items"][0]["sourceId"]) == ("gh-pr-7", "GH-7")


def test_load_snapshot_returns_none_before_first_save(tmp_path: Path) -> None:
    """An empty data root should have no snapshot."""
    assert _store(tmp_path).load_snapshot() is None


def test_load_snapshot_raises_for_corrupt_document(tmp_path: Path) -> None:
    """Corrupt JSON should raise a store error."""
    (tmp_path / "roadmap_data.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(RoadmapStoreError):
        _store(tmp_path).load_snapshot()


def test_load_snapshot_raises_for_unknown_source(tmp_path: Path) -> None:
    """Unknown source tags should raise a store error."""
    payload = {"items": [{"id": "x", "source": "jira"}], "lastUpdated": "2024-06-01T00:00:00Z"}
    (tmp_path / "roadmap_data.json").write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(RoadmapStoreError):
        _store(tmp_path).load_snapshot()


def test_column_mapping_defaults_then_persists(tmp_path: Path) -> None:
    """The default mapping should apply until a mapping is saved."""
    store = _store(tmp_path)
    default_mapping = store.load_column_mapping()
    custom_mapping = ColumnMapping(title="Feature", date="Release")

    store.save_column_mapping(custom_mapping)

    assert default_mapping.title == "Title"
    assert store.load_column_mapping() == custom_mapping


def test_save_github_files_records_names(tmp_path: Path) -> None:
    """GitHub file entries should record names and leave unset entries null."""
    store = _store(tmp_path)

    store.save_github_files("prs.json", None)
    entries = store.load_github_files()

    assert entries["prs"]["name"] == "prs.json" and entries["issues"] is None


def test_clear_removes_all_documents(tmp_path: Path) -> None:
    """Clearing should remove snapshot, mapping, and file entries."""
    store = _store(tmp_path)
    store.save_snapshot(_snapshot())
    store.save_column_mapping(ColumnMapping(title="Feature"))
    store.save_github_files("prs.json", "issues.json")

    store.clear()

    assert store.load_snapshot() is None
    assert store.load_column_mapping().title == "Title"
    assert list(tmp_path.iterdir()) == []
