"""Status vocabulary normalization.

This module maps free-text and GitHub state codes onto the fixed
roadmap status vocabulary. Every function here is total.
"""

from __future__ import annotations

from core.constants import UNMATCHED_STATUS_UNKNOWN
from core.types import ItemStatus

# Checked in order; the first rule with a matching term wins.
_STATUS_RULES: tuple[tuple[tuple[str, ...], ItemStatus], ...] = (
    (("progress", "進行中"), ItemStatus.IN_PROGRESS),
    (("backlog", "バックログ"), ItemStatus.BACKLOG),
    (("completed", "完了"), ItemStatus.COMPLETED),
    (("merged", "マージ"), ItemStatus.MERGED),
)

_STATUSES_BY_FOLDED_VALUE = {status.value.casefold(): status for status in ItemStatus}


def normalize_status(status: object) -> str:
    """Map free-text status onto the status vocabulary.

    Args:
        status: Raw status value, usually a spreadsheet cell.

    Returns:
        Vocabulary value for the first matching rule, otherwise the
        original text unchanged. ``None`` becomes an empty string.
    """
    if status is None:
        return ""
    status_text = str(status)
    folded_text = status_text.casefold()
    for terms, normalized_status in _STATUS_RULES:
        if any(term in folded_text for term in terms):
            return normalized_status.value
    return status_text


def resolve_status(status: object, unmatched_policy: str) -> str:
    """Normalize status text and apply the unmatched-status policy.

    Args:
        status: Raw status value.
        unmatched_policy: ``preserve`` keeps unmatched text, ``unknown``
            coerces it to ``Unknown``.

    Returns:
        Normalized status text. Under ``unknown`` a vocabulary value in
        any case is returned in its canonical spelling.
    """
    normalized_status = normalize_status(status)
    if unmatched_policy != UNMATCHED_STATUS_UNKNOWN:
        return normalized_status
    known_status = _STATUSES_BY_FOLDED_VALUE.get(normalized_status.strip().casefold())
    if known_status is not None:
        return known_status.value
    return ItemStatus.UNKNOWN.value


def map_github_state(state: object, merged: object = None) -> str:
    """Map a GitHub pull request or issue state onto the vocabulary.

    Args:
        state: Raw ``state`` value such as ``OPEN`` or ``closed``.
        merged: Merged flag or merge timestamp; any populated value wins.

    Returns:
        ``Merged``, ``Open``, or ``Closed``; unknown states map to ``Open``.
    """
    state_text = str(state).upper() if state is not None else ""
    if merged or state_text == "MERGED":
        return ItemStatus.MERGED.value
    if state_text == "CLOSED":
        return ItemStatus.CLOSED.value
    return ItemStatus.OPEN.value
