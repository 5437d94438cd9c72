"""
Record normalization - the single point of contact with the catalog wire format.

Turns raw scene/image dicts from GraphQL into immutable Record values.
Never raises on missing optional fields and never propagates a date parse error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from markstats.helpers.dto.stats_dto import InvalidDate, ItemKind, Record, Tag
from markstats.helpers.time_helper import parse_calendar_date

logger = logging.getLogger(__name__)


def normalize(raw_item: Mapping[str, Any], kind: ItemKind) -> Record:
    """
    Normalize one raw catalog item.

    Args:
        raw_item: Scene or image dict as returned by findScenes/findImages
        kind: Which item kind the dict came from

    Returns:
        Record with mark_count, occurred_on and tags mapped from the wire names
    """
    return Record(
        id=str(raw_item.get("id", "")),
        kind=kind,
        mark_count=_mark_count(raw_item.get("o_counter")),
        occurred_on=_occurred_on(raw_item.get("date")),
        tags=_tags(raw_item.get("tags")),
    )


def normalize_many(raw_items: Iterable[Mapping[str, Any]], kind: ItemKind) -> list[Record]:
    """Normalize a list of raw items, preserving order."""
    return [normalize(item, kind) for item in raw_items]


def _mark_count(value: Any) -> int | None:
    # bool is an int subclass; a boolean counter is not data
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _occurred_on(value: Any) -> date | InvalidDate | None:
    if value is None:
        return None
    if not isinstance(value, str):
        return InvalidDate(raw=repr(value))
    if not value.strip():
        return None
    try:
        return parse_calendar_date(value)
    except ValueError:
        return InvalidDate(raw=value)


def _tags(value: Any) -> tuple[Tag, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    tags: list[Tag] = []
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        name = entry.get("name")
        if not isinstance(name, str):
            logger.debug(f"Skipping tag without a name: {entry!r}")
            continue
        tag_id = entry.get("id")
        tags.append(Tag(id=None if tag_id is None else str(tag_id), name=name))
    return tuple(tags)
