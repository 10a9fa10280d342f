"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_roadmap_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of the caller's ROADMAP_* environment."""
    for variable_name in (
        "ROADMAP_DATA_ROOT",
        "ROADMAP_MAX_FILE_SIZE_MB",
        "ROADMAP_PREVIEW_LIMIT",
        "ROADMAP_UNMATCHED_STATUS",
    ):
        monkeypatch.delenv(variable_name, raising=False)
