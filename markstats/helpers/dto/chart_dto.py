"""
Charting DTOs.

Rules:
- Import only stdlib and typing (no markstats.* imports)
- Pure data structures only
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(str, Enum):
    """Bar direction. Horizontal bars put categories on the y axis."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def index_axis(self) -> str:
        return "y" if self is Orientation.HORIZONTAL else "x"

    @property
    def value_axis(self) -> str:
        return "x" if self is Orientation.HORIZONTAL else "y"


@dataclass(frozen=True)
class Palette:
    """Bar fill and border colors."""

    background: str
    border: str


TAG_PALETTE = Palette(background="rgba(54, 162, 235, 0.5)", border="rgba(54, 162, 235, 1)")
YEAR_PALETTE = Palette(background="rgba(75, 192, 192, 0.5)", border="rgba(75, 192, 192, 1)")
