"""
Chart.js bar chart configuration builder.

Produces the plain dict handed to the rendering backend. Cosmetics match the
host application's dark theme.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from markstats.helpers.dto.chart_dto import Orientation, Palette

TICK_COLOR = "#ccc"
GRID_COLOR = "rgba(255,255,255,0.1)"


def build_bar_chart_config(
    labels: Sequence[str],
    values: Sequence[int | float],
    series_label: str,
    title: str,
    orientation: Orientation,
    palette: Palette,
) -> dict[str, Any]:
    """
    Build a single-dataset bar chart config.

    Horizontal bars start the category axis at zero, vertical bars start the
    value axis at zero.

    Args:
        labels: Category labels
        values: One numeric value per label
        series_label: Dataset label (tooltip text)
        title: Chart title shown above the bars
        orientation: Bar direction
        palette: Fill/border colors

    Returns:
        Chart.js config dict
    """
    zero_axis = orientation.index_axis if orientation is Orientation.HORIZONTAL else orientation.value_axis
    scales = {
        axis: {
            "ticks": {"color": TICK_COLOR},
            "grid": {"color": GRID_COLOR},
            "beginAtZero": axis == zero_axis,
        }
        for axis in ("x", "y")
    }
    return {
        "type": "bar",
        "data": {
            "labels": list(labels),
            "datasets": [
                {
                    "label": series_label,
                    "data": list(values),
                    "backgroundColor": palette.background,
                    "borderColor": palette.border,
                    "borderWidth": 1,
                }
            ],
        },
        "options": {
            "indexAxis": orientation.index_axis,
            "scales": scales,
            "plugins": {
                "legend": {"display": False},
                "title": {"text": title, "display": True},
            },
        },
    }
