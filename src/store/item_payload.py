"""Shared JSON serialization for roadmap items and snapshots.

This module centralizes RoadmapItem payload conversion. Payload keys
follow the persisted roadmap format (``id``, ``sourceId``, ``lastUpdated``).
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import DEFAULT_CATEGORY
from core.errors import RoadmapStoreError
from core.timestamps import format_timestamp, parse_timestamp
from core.types import ItemSource, RoadmapItem, RoadmapSnapshot


def roadmap_item_to_payload(item: RoadmapItem) -> dict[str, str]:
    """Serialize a RoadmapItem into a JSON-safe payload.

    Args:
        item: Roadmap item.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "id": item.item_id,
        "source": item.source.value,
        "sourceId": item.source_id,
        "title": item.title,
        "status": item.status,
        "assignee": item.assignee,
        "date": item.date,
        "category": item.category,
        "description": item.description,
        "url": item.url,
    }


def roadmap_item_from_payload(payload: Mapping[str, Any]) -> RoadmapItem:
    """Deserialize a JSON payload into a RoadmapItem.

    Args:
        payload: Serialized item payload.

    Returns:
        Parsed roadmap item.

    Raises:
        RoadmapStoreError: If the source tag is unknown.
    """
    raw_source = str(payload.get("source", ""))
    try:
        source = ItemSource(raw_source)
    except ValueError as error:
        raise RoadmapStoreError(
            f"Stored roadmap item {payload.get('id')!r} has unknown source '{raw_source}'. "
            "Reset stored data and ingest again."
        ) from error
    return RoadmapItem(
        item_id=str(payload.get("id", "")),
        source=source,
        source_id=str(payload.get("sourceId", "")),
        title=str(payload.get("title") or ""),
        status=str(payload.get("status") or ""),
        assignee=str(payload.get("assignee") or ""),
        date=str(payload.get("date") or ""),
        category=str(payload.get("category") or DEFAULT_CATEGORY),
        description=str(payload.get("description") or ""),
        url=str(payload.get("url") or ""),
    )


def snapshot_to_payload(snapshot: RoadmapSnapshot) -> dict[str, object]:
    """Serialize a snapshot into the stored roadmap document."""
    return {
        "items": [roadmap_item_to_payload(item) for item in snapshot.items],
        "lastUpdated": format_timestamp(snapshot.last_updated),
    }


def snapshot_from_payload(payload: object) -> RoadmapSnapshot:
    """Deserialize the stored roadmap document.

    Args:
        payload: Decoded JSON document.

    Returns:
        Snapshot with items in stored order.

    Raises:
        RoadmapStoreError: If the document shape is invalid.
    """
    if not isinstance(payload, Mapping) or not isinstance(payload.get("items"), list):
        raise RoadmapStoreError(
            "Stored roadmap data is invalid: expected an object with an 'items' list. "
            "Reset stored data and ingest again."
        )
    items = tuple(
        roadmap_item_from_payload(row) for row in payload["items"] if isinstance(row, Mapping)
    )
    last_updated = parse_timestamp(payload.get("lastUpdated"))
    if last_updated is None:
        raise RoadmapStoreError(
            "Stored roadmap data is invalid: 'lastUpdated' is missing or not a timestamp. "
            "Reset stored data and ingest again."
        )
    return RoadmapSnapshot(items=items, last_updated=last_updated)
