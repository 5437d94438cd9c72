"""
Domain DTOs shared across layers.

Rules for DTO modules:
- Import only stdlib and typing (no markstats.* imports)
- Contain ONLY dataclass/enum definitions and simple constants
- No I/O, no business logic
"""

from __future__ import annotations

from markstats.helpers.dto.chart_dto import TAG_PALETTE, YEAR_PALETTE, Orientation, Palette
from markstats.helpers.dto.lifecycle_dto import MountState, RenderCycleResult
from markstats.helpers.dto.stats_dto import (
    UNKNOWN_YEAR,
    ChartSeries,
    InvalidDate,
    ItemKind,
    Record,
    Tag,
    TagFrequencyEntry,
    YearBucket,
)

__all__ = [
    "TAG_PALETTE",
    "UNKNOWN_YEAR",
    "YEAR_PALETTE",
    "ChartSeries",
    "InvalidDate",
    "ItemKind",
    "MountState",
    "Orientation",
    "Palette",
    "Record",
    "RenderCycleResult",
    "Tag",
    "TagFrequencyEntry",
    "YearBucket",
]
