"""Core constants used across roadmap modules.

This module centralizes labels, file names, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".roadmap")
ROADMAP_DATA_FILE_NAME = "roadmap_data.json"
COLUMN_MAPPING_FILE_NAME = "column_mapping.json"
GITHUB_FILES_FILE_NAME = "github_files.json"

DEFAULT_MAX_FILE_SIZE_MB = 10
DEFAULT_PREVIEW_LIMIT = 10
SUPPORTED_GITHUB_EXTENSIONS = (".json",)
SUPPORTED_SPREADSHEET_EXTENSIONS = (".csv", ".xlsx")
LEGACY_SPREADSHEET_EXTENSIONS = (".xls",)

PULL_REQUEST_ID_PREFIX = "gh-pr"
ISSUE_ID_PREFIX = "gh-issue"
COMMIT_ID_PREFIX = "gh-commit"
SPREADSHEET_ID_PREFIX = "csv"
GITHUB_SOURCE_ID_PREFIX = "GH"
SPREADSHEET_SOURCE_ID_PREFIX = "CSV"
COMMIT_SHORT_SHA_LENGTH = 7

PULL_REQUEST_CATEGORY = "Pull Request"
ISSUE_CATEGORY = "Issue"
COMMIT_CATEGORY = "Commit"
SPREADSHEET_CATEGORY = "Roadmap"
DEFAULT_CATEGORY = "Other"

DEFAULT_SPREADSHEET_STATUS = "Backlog"
COLUMN_MAPPING_FIELDS = ("title", "status", "assignee", "date")
DEFAULT_COLUMN_MAPPING = {
    "title": "Title",
    "status": "Status",
    "assignee": "Assignee",
    "date": "Date",
}

UNMATCHED_STATUS_PRESERVE = "preserve"
UNMATCHED_STATUS_UNKNOWN = "unknown"
SUPPORTED_UNMATCHED_STATUS_POLICIES = (UNMATCHED_STATUS_PRESERVE, UNMATCHED_STATUS_UNKNOWN)
