"""
Chart sink - wraps aggregation output into backend calls.

Owns at most one live chart per mount id and disposes the previous one before
drawing a new one. A missing backend degrades to a textual notice in place of
the chart.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from markstats.components.charting.chart_config_comp import build_bar_chart_config
from markstats.components.charting.chartjs_backend_comp import ChartBackend, ChartHandle
from markstats.components.mount.surface_comp import Document, Element
from markstats.helpers.dto.chart_dto import TAG_PALETTE, Orientation, Palette

logger = logging.getLogger(__name__)

MISSING_BACKEND_NOTICE = "Chart.js library not found."
MISSING_BACKEND_HINT = "Please ensure Chart.js is configured (chartjs_url) for this page."


class ChartSink:
    """Render bar charts into canvases of a host document."""

    def __init__(self, document: Document, backend: ChartBackend | None) -> None:
        self.document = document
        self.backend = backend
        self._handles: dict[str, ChartHandle] = {}

    def has_chart(self, mount_id: str) -> bool:
        return mount_id in self._handles

    def render(
        self,
        mount_id: str,
        labels: Sequence[str],
        values: Sequence[int | float],
        series_label: str,
        title: str,
        orientation: Orientation,
        palette: Palette = TAG_PALETTE,
    ) -> None:
        """
        Draw (or redraw) a bar chart on the canvas with id mount_id.

        Raises:
            ValueError: If labels and values differ in length
        """
        if len(labels) != len(values):
            raise ValueError(f"labels ({len(labels)}) and values ({len(values)}) must have the same length")

        canvas = self.document.get_element_by_id(mount_id)

        if self.backend is None:
            if canvas is not None and canvas.parent is not None:
                canvas.parent.replace_children(
                    Element("p", text=MISSING_BACKEND_NOTICE, style={"color": "yellow"}),
                    Element("p", text=MISSING_BACKEND_HINT),
                )
            self._handles.pop(mount_id, None)
            logger.error(f"Chart.js is not loaded. Cannot draw chart for {title}.")
            return

        if canvas is None:
            logger.warning(f"Mount element {mount_id!r} not found; skipping chart {title!r}")
            return

        previous = self._handles.pop(mount_id, None)
        if previous is not None:
            previous.destroy()

        config = build_bar_chart_config(labels, values, series_label, title, orientation, palette)
        self._handles[mount_id] = self.backend.create(canvas, config)
        logger.debug(f"Rendered {title!r} into {mount_id} ({len(labels)} bars)")

    def dispose_all(self) -> None:
        """Destroy every live chart handle."""
        for handle in self._handles.values():
            handle.destroy()
        self._handles.clear()
