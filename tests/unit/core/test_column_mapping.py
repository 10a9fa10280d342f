"""Unit tests for column mapping parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.column_mapping import (
    column_mapping_from_dict,
    default_column_mapping,
    load_column_mapping_file,
    merge_column_mapping,
)
from core.errors import RoadmapConfigError
from core.types import ColumnMapping
from tests.fixture_paths import fixture_path


def test_default_column_mapping_uses_titled_columns() -> None:
    """The default mapping should name Title, Status, Assignee, Date."""
    assert default_column_mapping() == ColumnMapping(
        title="Title", status="Status", assignee="Assignee", date="Date"
    )


def test_load_column_mapping_file_reads_yaml() -> None:
    """A YAML mapping file should load all four fields."""
    mapping = load_column_mapping_file(str(fixture_path("spreadsheets/column_mapping.yaml")))

    assert mapping == ColumnMapping(title="Feature", status="State", assignee="Owner", date="Release")


def test_load_column_mapping_file_rejects_unknown_keys() -> None:
    """Unknown mapping keys should raise a config error."""
    with pytest.raises(RoadmapConfigError):
        load_column_mapping_file(str(fixture_path("spreadsheets/invalid_mapping.yaml")))


def test_load_column_mapping_file_raises_for_missing_file(tmp_path: Path) -> None:
    """A missing mapping file should raise a config error."""
    with pytest.raises(RoadmapConfigError):
        load_column_mapping_file(str(tmp_path / "missing.yaml"))


def test_load_column_mapping_file_reads_json(tmp_path: Path) -> None:
    """JSON documents should load as a YAML subset."""
    mapping_path = tmp_path / "mapping.json"
    mapping_path.write_text('{"title": "Name", "date": null}', encoding="utf-8")

    assert load_column_mapping_file(str(mapping_path)) == ColumnMapping(title="Name")


def test_column_mapping_from_dict_rejects_non_string_columns() -> None:
    """Column names must be strings."""
    with pytest.raises(RoadmapConfigError):
        column_mapping_from_dict({"title": 3})


def test_column_mapping_from_dict_treats_blank_as_unset() -> None:
    """Blank column names should count as unset."""
    assert column_mapping_from_dict({"status": "  "}).status is None


def test_merge_column_mapping_overrides_only_provided_fields() -> None:
    """None overrides should keep the base columns."""
    merged = merge_column_mapping(default_column_mapping(), {"title": "Feature", "date": None})

    assert (merged.title, merged.date) == ("Feature", "Date")
