"""Column mapping parsing and validation.

This module loads spreadsheet column mappings from YAML files or plain
mappings. Only the keys ``title``, ``status``, ``assignee``, and ``date``
are recognized.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, cast

from core.constants import COLUMN_MAPPING_FIELDS, DEFAULT_COLUMN_MAPPING
from core.errors import RoadmapConfigError, RoadmapDependencyError
from core.types import ColumnMapping


def default_column_mapping() -> ColumnMapping:
    """Return the mapping used before a user configures one."""
    return ColumnMapping(**DEFAULT_COLUMN_MAPPING)


def column_mapping_from_dict(payload: object, context: str = "column mapping") -> ColumnMapping:
    """Validate a mapping payload into a ColumnMapping.

    Args:
        payload: Mapping of canonical field to column name or null.
        context: Source description for error messages.

    Returns:
        Validated column mapping; empty strings count as unset.

    Raises:
        RoadmapConfigError: If payload shape or keys are invalid.
    """
    if not isinstance(payload, Mapping):
        raise RoadmapConfigError(
            f"Invalid {context}: expected object mapping, got {type(payload).__name__}."
        )
    unknown_keys = sorted(str(key) for key in payload.keys() if key not in COLUMN_MAPPING_FIELDS)
    if unknown_keys:
        supported_rows = ", ".join(COLUMN_MAPPING_FIELDS)
        raise RoadmapConfigError(
            f"Invalid {context}: unknown keys {unknown_keys}. Use only: {supported_rows}."
        )
    fields: dict[str, str | None] = {}
    for field_name in COLUMN_MAPPING_FIELDS:
        fields[field_name] = _optional_column(payload.get(field_name), field_name, context)
    return ColumnMapping(**fields)


def load_column_mapping_file(mapping_path: str) -> ColumnMapping:
    """Load a column mapping from a YAML or JSON file.

    Args:
        mapping_path: File path to the mapping document.

    Returns:
        Validated column mapping.

    Raises:
        RoadmapDependencyError: If PyYAML is unavailable.
        RoadmapConfigError: If the file is missing or invalid.
    """
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise RoadmapDependencyError(
            "Column mapping files require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    mapping_file = Path(mapping_path).expanduser().resolve()
    if not mapping_file.exists():
        raise RoadmapConfigError(
            f"Column mapping file does not exist at {mapping_file}. Provide a valid YAML file."
        )
    try:
        payload = cast(object, yaml.safe_load(mapping_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise RoadmapConfigError(
            f"Failed to read column mapping at {mapping_file}: {error}."
        ) from error
    except yaml.YAMLError as error:
        raise RoadmapConfigError(
            f"Failed to parse column mapping at {mapping_file}: {error}. Fix YAML syntax."
        ) from error
    if payload is None:
        raise RoadmapConfigError(
            f"Column mapping at {mapping_file} is empty. Define title, status, assignee, date."
        )
    return column_mapping_from_dict(payload, f"column mapping at {mapping_file}")


def merge_column_mapping(base: ColumnMapping, overrides: Mapping[str, str | None]) -> ColumnMapping:
    """Overlay explicitly provided column names on a base mapping.

    Args:
        base: Mapping to start from.
        overrides: Field to column; ``None`` values leave the base field.

    Returns:
        Merged column mapping.
    """
    merged = base.as_dict()
    for field_name, column in overrides.items():
        if column is not None:
            merged[field_name] = column
    return column_mapping_from_dict(merged)


def _optional_column(value: object, field_name: str, context: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise RoadmapConfigError(
            f"Invalid {context}: field '{field_name}' must be a column name string, "
            f"got {type(value).__name__}."
        )
    return value if value.strip() else None
