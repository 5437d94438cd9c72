"""
Statistics domain DTOs.

Data transfer objects for normalized media records and aggregation results.
These form cross-layer contracts between components, workflows and services.

Rules:
- Import only stdlib and typing (no markstats.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

UNKNOWN_YEAR = "Unknown"


class ItemKind(str, Enum):
    """The two media item kinds that carry a mark count."""

    SCENE = "scene"  # video-like
    IMAGE = "image"  # image-like


@dataclass(frozen=True)
class Tag:
    """A tag attached to a media item."""

    id: str | None
    name: str


@dataclass(frozen=True)
class InvalidDate:
    """Marker for a date value that was present but could not be parsed."""

    raw: str


@dataclass(frozen=True)
class Record:
    """
    Normalized unit of aggregation.

    mark_count=None means "no data" and is distinct from 0.
    occurred_on is None when absent, InvalidDate when unparsable.
    """

    id: str
    kind: ItemKind
    mark_count: int | None
    occurred_on: date | InvalidDate | None = None
    tags: tuple[Tag, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TagFrequencyEntry:
    """Occurrence count of one tag name across a record collection."""

    tag_name: str
    occurrence_count: int


@dataclass(frozen=True)
class YearBucket:
    """Summed mark count for one release year ("Unknown" for undated records)."""

    year_label: str
    summed_mark_count: int


@dataclass(frozen=True)
class ChartSeries:
    """Chart-ready parallel label/value sequences."""

    labels: list[str]
    values: list[int]

    def reversed(self) -> ChartSeries:
        """Return the series in reverse order (horizontal bars draw bottom-up)."""
        return ChartSeries(labels=list(reversed(self.labels)), values=list(reversed(self.values)))
