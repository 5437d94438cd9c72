"""
Chart.js rendering backend.

The backend is the external rendering collaborator: given a canvas and a
config it draws a chart and returns a disposable handle. ChartJsBackend draws
by placing an inline <script> right after the canvas; the page loads Chart.js
from the configured URL.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from markstats.components.mount.surface_comp import Document, Element

logger = logging.getLogger(__name__)

CHARTJS_SCRIPT_ID = "markstats-chartjs"


class ChartHandle(Protocol):
    """A live chart that must be destroyed before its canvas is reused."""

    def destroy(self) -> None: ...


class ChartBackend(Protocol):
    """Anything that can draw a chart config onto a canvas element."""

    def create(self, canvas: Element, config: dict[str, Any]) -> ChartHandle: ...


class ChartJsHandle:
    """Handle for one inline Chart.js script."""

    def __init__(self, canvas: Element, script: Element) -> None:
        self.canvas = canvas
        self.script = script
        self.destroyed = False

    def destroy(self) -> None:
        self.script.remove()
        self.destroyed = True


class ChartJsBackend:
    """Emit Chart.js constructor calls into the host page."""

    def __init__(self, document: Document, script_url: str) -> None:
        self.document = document
        self.script_url = script_url

    def install(self) -> None:
        """Add the Chart.js <script src> to the page head once."""
        if self.document.get_element_by_id(CHARTJS_SCRIPT_ID) is not None:
            return
        self.document.head.append_child(
            Element("script", id=CHARTJS_SCRIPT_ID, attrs={"src": self.script_url}, raw_text="")
        )

    def create(self, canvas: Element, config: dict[str, Any]) -> ChartJsHandle:
        if canvas.id is None or canvas.parent is None:
            raise ValueError(f"Canvas {canvas!r} must have an id and be attached to the page")
        self.install()
        payload = json.dumps(config).replace("</", "<\\/")
        script = Element(
            "script",
            attrs={"data-chart-for": canvas.id},
            raw_text=f"new Chart(document.getElementById({json.dumps(canvas.id)}), {payload});",
        )
        canvas.parent.insert_after(canvas, script)
        return ChartJsHandle(canvas, script)
