"""Stats button service - navbar "Statistics" button and the statistics modal.

The host re-renders its navbar on client-side navigation, dropping injected
children. Instead of reacting to individual DOM mutations, the service polls
the page on a fixed interval (default 1.0 s) and re-injects the button once the
navbar parent has been present for a quiet period (default 0.25 s).

Clicking the button opens a modal that fetches records and renders the
"Most Common Tags" chart. A fetch that completes after the modal was closed is
dropped.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass

from markstats.components.charting.chart_sink_comp import ChartSink
from markstats.components.mount.stats_layout_comp import LOADING_TEXT, chart_canvas
from markstats.components.mount.surface_comp import Document, Element
from markstats.services.infrastructure.mount_coordinator_svc import RecordSource
from markstats.workflows.stats.render_stats_charts_wf import COMMON_TAGS_TITLE, render_common_tags_chart_workflow

logger = logging.getLogger(__name__)

BUTTON_ID = "markstats-btn"
BUTTON_TEXT = "Statistics"
MODAL_ID = "markstats-modal"
MODAL_BODY_ID = "markstats-modal-body"
MODAL_TITLE = "Mark Count Statistics"
MODAL_CHART_ID = "mostCommonTagsChart"


@dataclass
class StatsButtonConfig:
    """Configuration for StatsButtonService."""

    parent_selector: str = ".navbar-buttons"
    poll_interval: float = 1.0
    debounce: float = 0.25
    tag_limit: int = 15


class StatsButtonService:
    """Keeps the Statistics button in the navbar and serves the modal."""

    def __init__(self, cfg: StatsButtonConfig, document: Document, source: RecordSource, sink: ChartSink) -> None:
        self.cfg = cfg
        self.document = document
        self.source = source
        self.sink = sink
        self._poll_task: asyncio.Task | None = None
        self._parent_seen_at: float | None = None
        self._modal_tasks: set[asyncio.Task] = set()
        self.injections = 0

    # ------------------------------------------------------------------
    # Button injection (debounced poll)
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the poll loop on the running event loop."""
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.get_running_loop().create_task(self._poll_loop())
            logger.info(
                f"Watching {self.cfg.parent_selector!r} every {self.cfg.poll_interval}s "
                f"(debounce={self.cfg.debounce}s)"
            )

    async def stop(self) -> None:
        for task in list(self._modal_tasks):
            task.cancel()
        if self._poll_task is None:
            return
        self._poll_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._poll_task
        self._poll_task = None

    @property
    def is_running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def _poll_loop(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            self.check(loop.time())
            await asyncio.sleep(self.cfg.poll_interval)

    def check(self, now: float) -> bool:
        """
        One poll tick.

        Args:
            now: Monotonic timestamp of this tick

        Returns:
            True if the button was injected on this tick
        """
        parent = self.document.query_selector(self.cfg.parent_selector)
        if parent is None:
            self._parent_seen_at = None
            return False
        if self.document.get_element_by_id(BUTTON_ID) is not None:
            return False
        if self._parent_seen_at is None:
            self._parent_seen_at = now
        if now - self._parent_seen_at < self.cfg.debounce:
            return False

        parent.append_child(self._build_button())
        self._parent_seen_at = None
        self.injections += 1
        logger.debug(f"Injected {BUTTON_ID} under {self.cfg.parent_selector!r}")
        return True

    def _build_button(self) -> Element:
        button = Element(
            "button",
            id=BUTTON_ID,
            text=BUTTON_TEXT,
            classes=["btn", "btn-info"],
            style={"margin-left": "8px"},
            attrs={"type": "button"},
        )
        button.add_click_listener(lambda _el: self._open_modal())
        return button

    def _open_modal(self) -> asyncio.Task:
        task = asyncio.ensure_future(self.show_modal())
        self._modal_tasks.add(task)
        task.add_done_callback(self._modal_tasks.discard)
        return task

    # ------------------------------------------------------------------
    # Modal
    # ------------------------------------------------------------------

    async def show_modal(self) -> Element:
        """
        Open the statistics modal and fill it.

        Returns:
            The modal backdrop element (detached again if the user closed it)
        """
        existing = self.document.get_element_by_id(f"{MODAL_ID}-backdrop")
        if existing is not None:
            existing.remove()

        backdrop, body = self._build_modal()
        self.document.body.append_child(backdrop)

        try:
            records = await self.source.fetch_all()
        except Exception as e:
            if backdrop.is_attached:
                body.replace_children(
                    Element("p", text=f"Error loading statistics: {e}", style={"color": "red"})
                )
            logger.error(f"Error loading statistics: {e}", exc_info=e)
            return backdrop

        if not backdrop.is_attached:
            logger.debug("Modal closed before statistics arrived; dropping result")
            return backdrop

        body.replace_children(Element("h3", text=COMMON_TAGS_TITLE), chart_canvas(MODAL_CHART_ID))
        try:
            render_common_tags_chart_workflow(records, self.sink, MODAL_CHART_ID, self.cfg.tag_limit)
        except Exception as e:
            logger.exception(f"Failed to render chart {MODAL_CHART_ID}: {e}")
            body.replace_children(
                Element("p", text=f"Error loading statistics: {e}", style={"color": "red"})
            )
        return backdrop

    def _build_modal(self) -> tuple[Element, Element]:
        close_button = Element("button", text="Close", classes=["btn", "btn-secondary", "close-modal-btn"])
        body = Element("div", id=MODAL_BODY_ID, children=[Element("p", text=LOADING_TEXT)])
        modal = Element(
            "div",
            id=MODAL_ID,
            style={
                "background-color": "#1e1e1e",
                "color": "#ccc",
                "padding": "20px",
                "border-radius": "8px",
                "width": "80%",
                "max-width": "1200px",
            },
            children=[
                Element(
                    "div",
                    style={"display": "flex", "justify-content": "space-between", "align-items": "center"},
                    children=[Element("h2", text=MODAL_TITLE, style={"color": "#fff"}), close_button],
                ),
                body,
            ],
        )
        backdrop = Element(
            "div",
            id=f"{MODAL_ID}-backdrop",
            style={
                "position": "fixed",
                "top": "0",
                "left": "0",
                "width": "100%",
                "height": "100%",
                "background-color": "rgba(0,0,0,0.5)",
                "z-index": "9999",
            },
            children=[modal],
        )
        close_button.add_click_listener(lambda _el: backdrop.remove())
        # clicks on the modal content do not reach the backdrop listener
        backdrop.add_click_listener(lambda _el: backdrop.remove())
        return backdrop, body
