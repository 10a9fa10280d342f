"""Roadmap CLI entry points.
This module exposes ingest, preview, timeline, and mapping commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.timeline_render import render_preview, render_timeline
from core.column_mapping import load_column_mapping_file, merge_column_mapping
from core.config import RoadmapConfig
from core.constants import COLUMN_MAPPING_FIELDS
from core.errors import RoadmapError
from core.types import ColumnMapping, IngestOptions
from store.roadmap_sdk import RoadmapClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="roadmap", description="Roadmap ingest CLI")
    parser.add_argument("--data-root", help="Override ROADMAP_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_preview_command(subparsers)
    _add_timeline_command(subparsers)
    _add_columns_command(subparsers)
    _add_mapping_command(subparsers)
    subparsers.add_parser("reset", help="Delete all stored roadmap data")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the roadmap CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root)
        if args.command == "ingest":
            return _run_ingest_command(client, args)
        if args.command == "preview":
            return _run_preview_command(client, args)
        if args.command == "timeline":
            return _run_timeline_command(client)
        if args.command == "columns":
            return _run_columns_command(client, args)
        if args.command == "mapping":
            return _run_mapping_command(client, args)
        if args.command == "reset":
            client.reset()
            print("reset")
            return 0
    except RoadmapError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> RoadmapClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = RoadmapConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return RoadmapClient(config)


def _run_ingest_command(client: RoadmapClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    if not any((args.pull_requests, args.issues, args.commits, args.spreadsheet)):
        print(
            "error: provide at least one of --pull-requests, --issues, --commits, --spreadsheet",
            file=sys.stderr,
        )
        return 2
    options = IngestOptions(
        pull_requests_path=args.pull_requests,
        issues_path=args.issues,
        commits_path=args.commits,
        spreadsheet_path=args.spreadsheet,
        column_mapping=_resolve_ingest_mapping(client, args),
    )
    snapshot = client.ingest(options)
    print(f"items={len(snapshot.items)}")
    print(f"last_updated={snapshot.last_updated.isoformat()}")
    return 0


def _run_preview_command(client: RoadmapClient, args: argparse.Namespace) -> int:
    """Handle preview command."""
    total_count = len(client.items())
    for line in render_preview(client.preview(args.limit), total_count):
        print(line)
    return 0


def _run_timeline_command(client: RoadmapClient) -> int:
    """Handle timeline command."""
    for line in render_timeline(client.timeline()):
        print(line)
    return 0


def _run_columns_command(client: RoadmapClient, args: argparse.Namespace) -> int:
    """Handle columns command."""
    for column in client.spreadsheet_columns(args.spreadsheet):
        print(column)
    return 0


def _run_mapping_command(client: RoadmapClient, args: argparse.Namespace) -> int:
    """Handle mapping command: optionally update, then print the mapping."""
    overrides = _mapping_overrides(args)
    mapping = client.column_mapping()
    if args.mapping_file:
        mapping = load_column_mapping_file(args.mapping_file)
    if args.mapping_file or any(column is not None for column in overrides.values()):
        mapping = merge_column_mapping(mapping, overrides)
        client.set_column_mapping(mapping)
    for field_name, column in mapping.as_dict().items():
        print(f"{field_name}={column or '-'}")
    return 0


def _resolve_ingest_mapping(
    client: RoadmapClient,
    args: argparse.Namespace,
) -> ColumnMapping | None:
    """Build the column mapping for an ingest run, None to use the stored one."""
    overrides = _mapping_overrides(args)
    has_overrides = any(column is not None for column in overrides.values())
    if not args.mapping_file and not has_overrides:
        return None
    if args.mapping_file:
        base_mapping = load_column_mapping_file(args.mapping_file)
    else:
        base_mapping = client.column_mapping()
    return merge_column_mapping(base_mapping, overrides)


def _mapping_overrides(args: argparse.Namespace) -> dict[str, str | None]:
    return {field_name: getattr(args, f"map_{field_name}") for field_name in COLUMN_MAPPING_FIELDS}


def _add_mapping_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mapping-file", help="YAML or JSON column mapping file")
    for field_name in COLUMN_MAPPING_FIELDS:
        parser.add_argument(
            f"--map-{field_name}",
            help=f"Spreadsheet column feeding the item {field_name}",
        )


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Load GitHub exports and a spreadsheet")
    parser.add_argument("--pull-requests", help="GitHub pull request JSON export")
    parser.add_argument("--issues", help="GitHub issue JSON export")
    parser.add_argument("--commits", help="Commit JSON export")
    parser.add_argument("--spreadsheet", help="CSV or XLSX roadmap file")
    _add_mapping_arguments(parser)


def _add_preview_command(subparsers: Any) -> None:
    """Register preview subcommand."""
    parser = subparsers.add_parser("preview", help="Show the first stored items")
    parser.add_argument("--limit", type=int, help="Maximum number of rows")


def _add_timeline_command(subparsers: Any) -> None:
    """Register timeline subcommand."""
    subparsers.add_parser("timeline", help="Show items grouped by date and category")


def _add_columns_command(subparsers: Any) -> None:
    """Register columns subcommand."""
    parser = subparsers.add_parser("columns", help="List spreadsheet header columns")
    parser.add_argument("spreadsheet", help="CSV or XLSX roadmap file")


def _add_mapping_command(subparsers: Any) -> None:
    """Register mapping subcommand."""
    parser = subparsers.add_parser("mapping", help="Show or update the column mapping")
    _add_mapping_arguments(parser)
