"""Source file readers for roadmap ingestion.

This module decodes GitHub JSON exports and CSV/XLSX roadmaps into raw
records. It validates file presence, size, and extension only; field
level handling belongs to the mappers.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any

from core.constants import (
    LEGACY_SPREADSHEET_EXTENSIONS,
    SUPPORTED_GITHUB_EXTENSIONS,
    SUPPORTED_SPREADSHEET_EXTENSIONS,
)
from core.errors import RoadmapDependencyError, RoadmapInputError
from core.types import SpreadsheetTable

_BYTES_PER_MB = 1024 * 1024


def read_github_records(source_path: str, max_file_size_mb: int) -> list[Any]:
    """Read a GitHub JSON export.

    Args:
        source_path: Path to a ``.json`` export from ``gh`` or the REST API.
        max_file_size_mb: Size limit for the file.

    Returns:
        Decoded records; a top-level object becomes a one-element list.

    Raises:
        RoadmapInputError: If the file is missing, too large, not UTF-8,
            or not JSON.
    """
    file_path = _validate_source_file(source_path, SUPPORTED_GITHUB_EXTENSIONS, max_file_size_mb)
    try:
        payload = json.loads(_read_source_text(file_path))
    except json.JSONDecodeError as error:
        raise RoadmapInputError(
            f"Failed to parse JSON export at {file_path}: {error.msg} "
            f"(line {error.lineno}). Re-export the file and retry ingest."
        ) from error
    if isinstance(payload, list):
        return payload
    return [payload]


def read_spreadsheet(source_path: str, max_file_size_mb: int) -> SpreadsheetTable:
    """Read a CSV or XLSX roadmap file.

    Args:
        source_path: Path to a ``.csv`` or ``.xlsx`` file.
        max_file_size_mb: Size limit for the file.

    Returns:
        Decoded rows plus header columns.

    Raises:
        RoadmapInputError: If the file is missing, too large, or unsupported.
        RoadmapDependencyError: If openpyxl is required but missing.
    """
    suffix = Path(source_path).suffix.lower()
    if suffix in LEGACY_SPREADSHEET_EXTENSIONS:
        raise RoadmapInputError(
            f"Legacy Excel format '{suffix}' is not supported for {source_path}. "
            "Save the workbook as .xlsx or .csv and retry."
        )
    file_path = _validate_source_file(
        source_path, SUPPORTED_SPREADSHEET_EXTENSIONS, max_file_size_mb
    )
    if suffix == ".csv":
        return _read_csv_table(file_path)
    return _read_xlsx_table(file_path)


def read_spreadsheet_columns(source_path: str, max_file_size_mb: int) -> tuple[str, ...]:
    """Return header columns of a spreadsheet for column mapping.

    Args:
        source_path: Path to a ``.csv`` or ``.xlsx`` file.
        max_file_size_mb: Size limit for the file.

    Returns:
        Header columns in file order.
    """
    return read_spreadsheet(source_path, max_file_size_mb).columns


def _validate_source_file(
    source_path: str,
    supported_extensions: tuple[str, ...],
    max_file_size_mb: int,
) -> Path:
    """Check file existence, extension, and size.

    Args:
        source_path: Input file path.
        supported_extensions: Allowed lowercase suffixes.
        max_file_size_mb: Size limit in megabytes.

    Returns:
        Resolved file path.

    Raises:
        RoadmapInputError: If any check fails.
    """
    file_path = Path(source_path).expanduser()
    if not file_path.is_file():
        raise RoadmapInputError(
            f"Failed to read source at {file_path}: file does not exist. "
            "Provide an existing export file."
        )
    if file_path.suffix.lower() not in supported_extensions:
        raise RoadmapInputError(
            f"Unsupported file format '{file_path.suffix}' for {file_path}. "
            f"Supported extensions: {supported_extensions}."
        )
    size_bytes = file_path.stat().st_size
    if size_bytes > max_file_size_mb * _BYTES_PER_MB:
        raise RoadmapInputError(
            f"Source file {file_path} is {size_bytes} bytes, above the "
            f"{max_file_size_mb} MB limit. Split the export or raise ROADMAP_MAX_FILE_SIZE_MB."
        )
    return file_path


def _read_source_text(file_path: Path) -> str:
    """Read a text source as UTF-8, tolerating a byte order mark.

    Raises:
        RoadmapInputError: If the file is unreadable or not UTF-8 encoded.
    """
    try:
        return file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as error:
        raise RoadmapInputError(
            f"Source file {file_path} is not UTF-8 encoded (invalid byte at offset "
            f"{error.start}). Re-save it as UTF-8 and retry ingest."
        ) from error
    except OSError as error:
        raise RoadmapInputError(
            f"Failed to read source at {file_path}: {error}. Check file permissions."
        ) from error


def _read_csv_table(file_path: Path) -> SpreadsheetTable:
    """Read CSV rows with the first line as header.

    Args:
        file_path: CSV file path.

    Returns:
        Rows with empty lines skipped.

    Raises:
        RoadmapInputError: If the file cannot be read as UTF-8 text.
    """
    reader = csv.DictReader(io.StringIO(_read_source_text(file_path), newline=""))
    columns = tuple(reader.fieldnames or ())
    rows = [dict(row) for row in reader if _has_values(row.values())]
    return SpreadsheetTable(rows=tuple(rows), columns=columns)


def _read_xlsx_table(file_path: Path) -> SpreadsheetTable:
    """Read the first worksheet with the first row as header.

    Args:
        file_path: XLSX workbook path.

    Returns:
        Rows with empty lines skipped.

    Raises:
        RoadmapDependencyError: If openpyxl is missing.
        RoadmapInputError: If the workbook cannot be opened.
    """
    try:
        import openpyxl
    except ImportError as error:
        raise RoadmapDependencyError(
            "XLSX support requires openpyxl, but it is not installed. "
            "Install openpyxl to ingest Excel roadmaps."
        ) from error
    try:
        workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
    except Exception as error:
        raise RoadmapInputError(
            f"Failed to open workbook at {file_path}: {error}. Check the file and retry."
        ) from error
    try:
        worksheet = workbook.worksheets[0]
        row_values = worksheet.iter_rows(values_only=True)
        header = next(row_values, None)
        if header is None:
            return SpreadsheetTable(rows=(), columns=())
        columns = tuple("" if cell is None else str(cell) for cell in header)
        rows = [
            {column: value for column, value in zip(columns, values) if column}
            for values in row_values
            if _has_values(values)
        ]
    finally:
        workbook.close()
    return SpreadsheetTable(rows=tuple(rows), columns=tuple(column for column in columns if column))


def _has_values(values: Any) -> bool:
    return any(value not in (None, "") for value in values)
