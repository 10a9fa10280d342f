"""Source record to roadmap item mapping.

This module converts raw GitHub pull requests, issues, commits, and
spreadsheet rows into canonical roadmap items. Mapping is per field and
best-effort: a malformed record gets defaulted fields, never an error.
Only a structurally invalid record collection raises RoadmapInputError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping

from core.constants import (
    COMMIT_CATEGORY,
    COMMIT_ID_PREFIX,
    COMMIT_SHORT_SHA_LENGTH,
    DEFAULT_SPREADSHEET_STATUS,
    GITHUB_SOURCE_ID_PREFIX,
    ISSUE_CATEGORY,
    ISSUE_ID_PREFIX,
    PULL_REQUEST_CATEGORY,
    PULL_REQUEST_ID_PREFIX,
    SPREADSHEET_CATEGORY,
    SPREADSHEET_ID_PREFIX,
    SPREADSHEET_SOURCE_ID_PREFIX,
    UNMATCHED_STATUS_PRESERVE,
)
from core.errors import RoadmapInputError
from core.logging_config import get_logger
from core.timestamps import format_timestamp, parse_timestamp, utc_now
from core.types import ColumnMapping, ItemSource, ItemStatus, RoadmapItem
from ingest.status_normalization import map_github_state, resolve_status

_LOGGER = get_logger(__name__)

RawRecord = Mapping[str, object]
KeyPath = tuple[str, ...]


@dataclass(frozen=True)
class TimestampDialect:
    """One named GitHub export shape for anchor timestamps.

    Attributes:
        name: Dialect label used in logs.
        date_paths: Key paths tried in order; the first parseable value wins.
    """

    name: str
    date_paths: tuple[KeyPath, ...]


# ``gh`` CLI exports use camelCase keys, REST API payloads use snake_case.
PULL_REQUEST_DIALECTS = (
    TimestampDialect("cli", (("mergedAt",), ("createdAt",))),
    TimestampDialect("api", (("merged_at",), ("created_at",))),
)
ISSUE_DIALECTS = (
    TimestampDialect("cli", (("closedAt",), ("createdAt",))),
    TimestampDialect("api", (("closed_at",), ("created_at",))),
)
COMMIT_DIALECTS = (
    TimestampDialect("cli", (("committedDate",), ("authoredDate",))),
    TimestampDialect("api", (("commit", "committer", "date"), ("commit", "author", "date"))),
)


def map_pull_request(
    record: RawRecord,
    now: datetime | None = None,
    position: int = 1,
) -> RoadmapItem:
    """Map one GitHub pull request record.

    Args:
        record: Raw pull request in CLI or API dialect.
        now: Ingestion instant used when no timestamp is usable.
        position: One-based position in the batch, used when ``number`` is missing.

    Returns:
        Canonical roadmap item.
    """
    number = _resolve_reference(record.get("number"), position, "pull_request")
    item_id = f"{PULL_REQUEST_ID_PREFIX}-{number}"
    merged = record.get("merged") or record.get("mergedAt") or record.get("merged_at")
    return RoadmapItem(
        item_id=item_id,
        source=ItemSource.GITHUB,
        source_id=f"{GITHUB_SOURCE_ID_PREFIX}-{number}",
        title=_text(record.get("title")),
        status=map_github_state(record.get("state"), merged),
        assignee=_first_login(record.get("author"), record.get("user")),
        date=_resolve_date(record, PULL_REQUEST_DIALECTS, now, item_id),
        category=PULL_REQUEST_CATEGORY,
        description=_text(record.get("body")),
        url=_first_text(record, ("url",), ("html_url",)),
    )


def map_issue(
    record: RawRecord,
    now: datetime | None = None,
    position: int = 1,
) -> RoadmapItem:
    """Map one GitHub issue record.

    Args:
        record: Raw issue in CLI or API dialect.
        now: Ingestion instant used when no timestamp is usable.
        position: One-based position in the batch, used when ``number`` is missing.

    Returns:
        Canonical roadmap item.
    """
    number = _resolve_reference(record.get("number"), position, "issue")
    item_id = f"{ISSUE_ID_PREFIX}-{number}"
    return RoadmapItem(
        item_id=item_id,
        source=ItemSource.GITHUB,
        source_id=f"{GITHUB_SOURCE_ID_PREFIX}-{number}",
        title=_text(record.get("title")),
        status=map_github_state(record.get("state")),
        assignee=_issue_assignee(record),
        date=_resolve_date(record, ISSUE_DIALECTS, now, item_id),
        category=ISSUE_CATEGORY,
        description=_text(record.get("body")),
        url=_first_text(record, ("url",), ("html_url",)),
    )


def map_commit(
    record: RawRecord,
    now: datetime | None = None,
    position: int = 1,
) -> RoadmapItem:
    """Map one commit record.

    Commits have no open/closed lifecycle and are always ``Completed``.

    Args:
        record: Raw commit from a ``gh``/GraphQL export or the REST API.
        now: Ingestion instant used when no timestamp is usable.
        position: One-based position in the batch, used when ``sha`` is missing.

    Returns:
        Canonical roadmap item.
    """
    raw_sha = _first_text(record, ("sha",), ("oid",))
    sha = raw_sha or f"unknown-{position}"
    if not raw_sha:
        _LOGGER.warning("record_reference_missing", kind="commit", position=position)
    short_sha = sha if not raw_sha else sha[:COMMIT_SHORT_SHA_LENGTH]
    item_id = f"{COMMIT_ID_PREFIX}-{sha}"
    message = _first_text(record, ("commit", "message"), ("message",))
    headline = _first_text(record, ("messageHeadline",)) or message.split("\n", 1)[0]
    return RoadmapItem(
        item_id=item_id,
        source=ItemSource.GITHUB,
        source_id=f"{GITHUB_SOURCE_ID_PREFIX}-{short_sha}",
        title=headline.strip(),
        status=ItemStatus.COMPLETED.value,
        assignee=_commit_author(record),
        date=_resolve_date(record, COMMIT_DIALECTS, now, item_id),
        category=COMMIT_CATEGORY,
        description=message,
        url=_first_text(record, ("url",), ("html_url",)),
    )


def map_spreadsheet_row(
    row: RawRecord,
    index: int,
    column_mapping: ColumnMapping,
    now: datetime | None = None,
    unmatched_status: str = UNMATCHED_STATUS_PRESERVE,
) -> RoadmapItem:
    """Map one spreadsheet row through a column mapping.

    Args:
        row: Raw row keyed by header column.
        index: Zero-based row index.
        column_mapping: Columns feeding title, status, assignee, and date.
        now: Ingestion instant used when the date cell is unusable.
        unmatched_status: Policy for status text matching no rule.

    Returns:
        Canonical roadmap item.
    """
    item_id = f"{SPREADSHEET_ID_PREFIX}-{index}"
    raw_status = _text(_cell(row, column_mapping.status)) or DEFAULT_SPREADSHEET_STATUS
    parsed_date = parse_timestamp(_cell(row, column_mapping.date))
    if parsed_date is None:
        parsed_date = _fallback_date(now, item_id)
    return RoadmapItem(
        item_id=item_id,
        source=ItemSource.CSV,
        source_id=f"{SPREADSHEET_SOURCE_ID_PREFIX}-{index + 1}",
        title=_text(_cell(row, column_mapping.title)),
        status=resolve_status(raw_status, unmatched_status),
        assignee=_text(_cell(row, column_mapping.assignee)),
        date=format_timestamp(parsed_date),
        category=SPREADSHEET_CATEGORY,
    )


def map_pull_requests(records: object, now: datetime | None = None) -> list[RoadmapItem]:
    """Map a pull request collection in input order.

    Args:
        records: List of raw pull requests, or one raw pull request.
        now: Ingestion instant shared by the batch.

    Returns:
        One item per record.

    Raises:
        RoadmapInputError: If records is not a record collection.
    """
    moment = now or utc_now()
    rows = _as_record_list(records, "pull request")
    return [map_pull_request(row, moment, position) for position, row in enumerate(rows, 1)]


def map_issues(records: object, now: datetime | None = None) -> list[RoadmapItem]:
    """Map an issue collection in input order.

    Args:
        records: List of raw issues, or one raw issue.
        now: Ingestion instant shared by the batch.

    Returns:
        One item per record.

    Raises:
        RoadmapInputError: If records is not a record collection.
    """
    moment = now or utc_now()
    rows = _as_record_list(records, "issue")
    return [map_issue(row, moment, position) for position, row in enumerate(rows, 1)]


def map_commits(records: object, now: datetime | None = None) -> list[RoadmapItem]:
    """Map a commit collection in input order.

    Args:
        records: List of raw commits, or one raw commit.
        now: Ingestion instant shared by the batch.

    Returns:
        One item per record.

    Raises:
        RoadmapInputError: If records is not a record collection.
    """
    moment = now or utc_now()
    rows = _as_record_list(records, "commit")
    return [map_commit(row, moment, position) for position, row in enumerate(rows, 1)]


def map_spreadsheet_rows(
    rows: object,
    column_mapping: ColumnMapping | None = None,
    now: datetime | None = None,
    unmatched_status: str = UNMATCHED_STATUS_PRESERVE,
) -> list[RoadmapItem]:
    """Map spreadsheet rows in input order.

    Args:
        rows: Decoded row mappings.
        column_mapping: Column mapping; unset fields default on every row.
        now: Ingestion instant shared by the batch.
        unmatched_status: Policy for status text matching no rule.

    Returns:
        One item per row with ``sourceId`` values ``CSV-1 .. CSV-n``.

    Raises:
        RoadmapInputError: If rows is not a row collection.
    """
    moment = now or utc_now()
    mapping = column_mapping or ColumnMapping()
    records = _as_record_list(rows, "spreadsheet row")
    return [
        map_spreadsheet_row(row, index, mapping, moment, unmatched_status)
        for index, row in enumerate(records)
    ]


def _as_record_list(records: object, kind: str) -> list[RawRecord]:
    """Validate a raw collection and coerce malformed entries.

    Args:
        records: Raw collection from the decoding layer.
        kind: Record kind for error context.

    Returns:
        Record mappings; non-mapping entries become empty records.

    Raises:
        RoadmapInputError: If records is not a collection of records.
    """
    if isinstance(records, Mapping):
        return [records]
    if records is None or isinstance(records, (str, bytes, bytearray)):
        raise RoadmapInputError(
            f"Invalid {kind} input: expected a list of records, "
            f"got {type(records).__name__}. Provide a JSON array or decoded row list."
        )
    if not isinstance(records, Iterable):
        raise RoadmapInputError(
            f"Invalid {kind} input: expected a list of records, got {type(records).__name__}."
        )
    normalized_records: list[RawRecord] = []
    for position, record in enumerate(records, 1):
        if isinstance(record, Mapping):
            normalized_records.append(record)
            continue
        _LOGGER.warning(
            "malformed_record_defaulted",
            kind=kind,
            position=position,
            value_type=type(record).__name__,
        )
        normalized_records.append({})
    return normalized_records


def _resolve_reference(raw_number: object, position: int, kind: str) -> str:
    if isinstance(raw_number, int) and not isinstance(raw_number, bool):
        return str(raw_number)
    if isinstance(raw_number, float) and raw_number.is_integer():
        return str(int(raw_number))
    if isinstance(raw_number, str) and raw_number.strip().isdigit():
        return str(int(raw_number.strip()))
    _LOGGER.warning("record_reference_missing", kind=kind, position=position)
    return f"unknown-{position}"


def _resolve_date(
    record: RawRecord,
    dialects: tuple[TimestampDialect, ...],
    now: datetime | None,
    item_id: str,
) -> str:
    """Resolve the anchor date across dialects in fixed precedence.

    Args:
        record: Raw source record.
        dialects: Dialects tried in order.
        now: Ingestion instant fallback.
        item_id: Item id for log context.

    Returns:
        ISO-8601 UTC timestamp.
    """
    for dialect in dialects:
        for path in dialect.date_paths:
            parsed_date = parse_timestamp(_lookup(record, path))
            if parsed_date is not None:
                return format_timestamp(parsed_date)
    return format_timestamp(_fallback_date(now, item_id))


def _fallback_date(now: datetime | None, item_id: str) -> datetime:
    _LOGGER.debug("item_date_defaulted", item_id=item_id)
    return now or utc_now()


def _issue_assignee(record: RawRecord) -> str:
    assignees = record.get("assignees")
    if isinstance(assignees, list) and assignees:
        first_login = _first_login(assignees[0])
        if first_login:
            return first_login
    return _first_login(record.get("assignee"))


def _commit_author(record: RawRecord) -> str:
    authors = record.get("authors")
    first_author = authors[0] if isinstance(authors, list) and authors else None
    login = _first_login(record.get("author"), first_author)
    if login:
        return login
    name = _first_text(record, ("commit", "author", "name"))
    if name:
        return name
    if isinstance(first_author, Mapping):
        return _text(first_author.get("name"))
    return ""


def _first_login(*candidates: object) -> str:
    for candidate in candidates:
        if isinstance(candidate, Mapping):
            login = _text(candidate.get("login"))
            if login:
                return login
    return ""


def _first_text(record: RawRecord, *paths: KeyPath) -> str:
    for path in paths:
        value = _text(_lookup(record, path))
        if value:
            return value
    return ""


def _lookup(record: RawRecord, path: KeyPath) -> object:
    value: object = record
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _cell(row: RawRecord, column: str | None) -> object:
    if not column:
        return None
    return row.get(column)


def _text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
