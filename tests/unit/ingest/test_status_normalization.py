"""Unit tests for status normalization rules."""

from __future__ import annotations

import pytest

from core.types import ItemStatus
from ingest.status_normalization import map_github_state, normalize_status, resolve_status


@pytest.mark.parametrize("raw_status", ["In Progress", "in progress", "IN PROGRESS", "進行中"])
def test_normalize_status_maps_progress_variants(raw_status: str) -> None:
    """Progress text in any case should normalize to In Progress."""
    assert normalize_status(raw_status) == ItemStatus.IN_PROGRESS.value


def test_normalize_status_checks_progress_before_backlog() -> None:
    """Text containing both terms should resolve by the first rule."""
    assert normalize_status("backlog, progress pending") == ItemStatus.IN_PROGRESS.value


def test_normalize_status_maps_localized_terms() -> None:
    """Localized terms should map like their English counterparts."""
    normalized = [normalize_status(text) for text in ("バックログ", "完了", "マージ済み")]

    assert normalized == ["Backlog", "Completed", "Merged"]


def test_normalize_status_passes_unmatched_text_through() -> None:
    """Unmatched text should be returned unchanged."""
    assert normalize_status("Needs Review") == "Needs Review"


def test_normalize_status_is_total_for_none_and_numbers() -> None:
    """Non-text input should never raise."""
    assert (normalize_status(None), normalize_status(3)) == ("", "3")


def test_resolve_status_unknown_policy_coerces_unmatched_text() -> None:
    """The unknown policy should replace unmatched text with Unknown."""
    assert resolve_status("Needs Review", "unknown") == ItemStatus.UNKNOWN.value


@pytest.mark.parametrize(
    ("raw_status", "expected"),
    [
        ("Open", "Open"),
        ("open", "Open"),
        ("CLOSED", "Closed"),
        ("closed", "Closed"),
        ("unknown", "Unknown"),
        ("completed", "Completed"),
    ],
)
def test_resolve_status_unknown_policy_keeps_vocabulary_values(
    raw_status: str,
    expected: str,
) -> None:
    """The unknown policy should keep vocabulary values in any case."""
    assert resolve_status(raw_status, "unknown") == expected


def test_resolve_status_preserve_policy_keeps_unmatched_text() -> None:
    """The preserve policy should keep unmatched text."""
    assert resolve_status("Planned", "preserve") == "Planned"


@pytest.mark.parametrize(
    ("state", "merged", "expected"),
    [
        ("OPEN", None, "Open"),
        ("closed", False, "Closed"),
        ("merged", None, "Merged"),
        ("CLOSED", True, "Merged"),
        ("CLOSED", "2024-01-05T10:00:00Z", "Merged"),
        ("draft", None, "Open"),
        (None, None, "Open"),
    ],
)
def test_map_github_state(state: object, merged: object, expected: str) -> None:
    """GitHub states should follow merged, open, closed precedence."""
    assert map_github_state(state, merged) == expected
