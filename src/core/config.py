"""Runtime configuration model for roadmap ingest.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_MAX_FILE_SIZE_MB,
    DEFAULT_PREVIEW_LIMIT,
    SUPPORTED_UNMATCHED_STATUS_POLICIES,
    UNMATCHED_STATUS_PRESERVE,
)
from core.errors import RoadmapConfigError


@dataclass(frozen=True)
class RoadmapConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for persisted roadmap data.
        max_file_size_mb: Upper bound for any input file size.
        preview_limit: Default number of rows shown in previews.
        unmatched_status: Policy for spreadsheet status text that matches
            no normalization rule, ``preserve`` or ``unknown``.
    """

    data_root: Path
    max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB
    preview_limit: int = DEFAULT_PREVIEW_LIMIT
    unmatched_status: str = UNMATCHED_STATUS_PRESERVE

    @classmethod
    def from_env(cls) -> "RoadmapConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            RoadmapConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("ROADMAP_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        max_file_size_mb = _parse_positive_int(
            "ROADMAP_MAX_FILE_SIZE_MB",
            os.getenv("ROADMAP_MAX_FILE_SIZE_MB", str(DEFAULT_MAX_FILE_SIZE_MB)),
        )
        preview_limit = _parse_positive_int(
            "ROADMAP_PREVIEW_LIMIT",
            os.getenv("ROADMAP_PREVIEW_LIMIT", str(DEFAULT_PREVIEW_LIMIT)),
        )
        unmatched_status = _parse_unmatched_status(
            os.getenv("ROADMAP_UNMATCHED_STATUS", UNMATCHED_STATUS_PRESERVE)
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            max_file_size_mb=max_file_size_mb,
            preview_limit=preview_limit,
            unmatched_status=unmatched_status,
        )


def _parse_positive_int(variable_name: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        variable_name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        RoadmapConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise RoadmapConfigError(
            f"Invalid {variable_name} value: expected integer, got '{raw_value}'. "
            f"Set {variable_name} to a positive number."
        ) from error
    if value <= 0:
        raise RoadmapConfigError(
            f"Invalid {variable_name} value: expected positive integer, got {value}."
        )
    return value


def _parse_unmatched_status(raw_value: str) -> str:
    normalized_value = raw_value.strip().lower()
    if normalized_value in SUPPORTED_UNMATCHED_STATUS_POLICIES:
        return normalized_value
    supported_rows = ", ".join(SUPPORTED_UNMATCHED_STATUS_POLICIES)
    raise RoadmapConfigError(
        f"Invalid ROADMAP_UNMATCHED_STATUS value '{raw_value}'. Use one of: {supported_rows}."
    )
