"""
Mount lifecycle DTOs.

Rules:
- Import only stdlib and typing (no markstats.* imports)
- Pure data structures only
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MountState(str, Enum):
    """States of one mount point."""

    UNLOADED = "unloaded"
    LOADED = "loaded"
    ACTIVATING = "activating"
    RENDERING = "rendering"
    RENDERED = "rendered"
    ERRORED = "errored"


@dataclass
class RenderCycleResult:
    """Outcome of one render cycle, as seen by the coordinator."""

    cycle: int
    state: MountState
    record_count: int = 0
    error: str | None = None
    stale: bool = False
    chart_failures: list[str] | None = None
