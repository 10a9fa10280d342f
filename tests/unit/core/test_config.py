"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import RoadmapConfig
from core.errors import RoadmapConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("ROADMAP_DATA_ROOT", "./.tmp-roadmap")

    config = RoadmapConfig.from_env()

    assert config.data_root.name == ".tmp-roadmap"


def test_from_env_defaults() -> None:
    """Config should fall back to documented defaults."""
    config = RoadmapConfig.from_env()

    assert (config.max_file_size_mb, config.preview_limit, config.unmatched_status) == (
        10,
        10,
        "preserve",
    )


def test_from_env_raises_for_invalid_preview_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-numeric preview limit."""
    monkeypatch.setenv("ROADMAP_PREVIEW_LIMIT", "ten")

    with pytest.raises(RoadmapConfigError):
        RoadmapConfig.from_env()


def test_from_env_raises_for_non_positive_file_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a zero file size limit."""
    monkeypatch.setenv("ROADMAP_MAX_FILE_SIZE_MB", "0")

    with pytest.raises(RoadmapConfigError):
        RoadmapConfig.from_env()


def test_from_env_accepts_unknown_status_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    """Policy values should be case-insensitive."""
    monkeypatch.setenv("ROADMAP_UNMATCHED_STATUS", "Unknown")

    assert RoadmapConfig.from_env().unmatched_status == "unknown"


def test_from_env_rejects_unsupported_status_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unsupported policy values should raise."""
    monkeypatch.setenv("ROADMAP_UNMATCHED_STATUS", "drop")

    with pytest.raises(RoadmapConfigError):
        RoadmapConfig.from_env()
