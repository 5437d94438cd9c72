"""Mount coordinator service - when and where the statistics section renders.

State machine per mount point:

    UNLOADED → LOADED → ACTIVATING → RENDERING → RENDERED
                                          └────→ ERRORED
    RENDERED / ERRORED → ACTIVATING on the next matching navigation

Activation:
- Preferred: a path-element listener on the host's navigation channel
- Fallback (no channel): one check of the current path at load time, logged as a warning

Serialization of render cycles:
Every activation bumps the mount point's generation and synchronously replaces
the container with the loading placeholder before the fetch is awaited. When a
fetch completes, its cycle is compared with the current generation; a stale
completion is dropped without touching the container. The latest activation
always wins.

The coordinator is the only writer of the stats container and its charts.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

from markstats.components.charting.chart_sink_comp import ChartSink
from markstats.components.events.navigation_channel_comp import NavigationChannel, normalize_path
from markstats.components.mount.stats_layout_comp import (
    TAGS_CHART_ID,
    YEAR_CHART_ID,
    chart_grid,
    error_panel,
    find_or_create_section,
    loading_placeholder,
)
from markstats.components.mount.surface_comp import Document, Element
from markstats.helpers.dto.lifecycle_dto import MountState, RenderCycleResult
from markstats.helpers.dto.stats_dto import Record
from markstats.helpers.logging_helper import clear_log_context, set_log_context
from markstats.workflows.stats.render_stats_charts_wf import render_stats_charts_workflow

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20  # render cycle results kept per mount point


class RecordSource(Protocol):
    """Anything that can produce a fresh record collection (MediaStatsService)."""

    async def fetch_all(self) -> list[Record]: ...


@dataclass
class MountCoordinatorConfig:
    """Configuration for MountCoordinatorService."""

    stats_path: str
    anchor_selector: str
    tag_chart_limit: int = 15


@dataclass
class _MountPoint:
    section: Element
    generation: int = 0
    state: MountState = MountState.LOADED
    history: deque[RenderCycleResult] = field(default_factory=lambda: deque(maxlen=HISTORY_LIMIT))


class MountCoordinatorService:
    """
    Owns the stats container(s) and drives render cycles.

    Single-threaded: intended to run on one asyncio event loop.
    """

    def __init__(self, cfg: MountCoordinatorConfig, source: RecordSource, sink: ChartSink) -> None:
        self.cfg = cfg
        self.source = source
        self.sink = sink
        self.state = MountState.UNLOADED
        self.listener_id: str | None = None
        self._mounts: dict[str, _MountPoint] = {}

    # ------------------------------------------------------------------
    # Loading / activation
    # ------------------------------------------------------------------

    async def load(
        self,
        document: Document,
        channel: NavigationChannel | None,
        current_path: str,
    ) -> RenderCycleResult | None:
        """
        Move UNLOADED → LOADED and arm activation.

        Args:
            document: Host page (used for the fallback anchor lookup)
            channel: Host navigation channel, or None when unavailable
            current_path: Path the page is on right now

        Returns:
            Result of the fallback render when one happened, else None
        """
        if self.state is not MountState.UNLOADED:
            logger.info("Mount coordinator already loaded; ignoring")
            return None
        self.state = MountState.LOADED

        if channel is not None:
            self.listener_id = channel.path_element_listener(
                self.cfg.stats_path, self.cfg.anchor_selector, self.render
            )
            return None

        logger.warning(
            "Navigation channel not available; cannot register stats page listener. "
            f"Attempting direct render if on {self.cfg.stats_path}."
        )
        if normalize_path(current_path) != normalize_path(self.cfg.stats_path):
            return None

        anchor = document.query_selector(self.cfg.anchor_selector)
        if anchor is None:
            logger.warning(f"Target element {self.cfg.anchor_selector!r} not found for direct render")
            return None
        return await self.render(anchor)

    def state_of(self, mount_id: str) -> MountState:
        mount = self._mounts.get(mount_id)
        return mount.state if mount else self.state

    def history_of(self, mount_id: str) -> list[RenderCycleResult]:
        mount = self._mounts.get(mount_id)
        return list(mount.history) if mount else []

    # ------------------------------------------------------------------
    # Render cycle
    # ------------------------------------------------------------------

    async def render(self, anchor: Element) -> RenderCycleResult:
        """
        Run one render cycle into the stats container under anchor.

        Never raises for fetch, aggregation or chart failures; the outcome is
        written to the container and returned.
        """
        section = find_or_create_section(anchor)
        mount_id = section.id or ""
        mount = self._mounts.get(mount_id)
        if mount is None:
            mount = self._mounts[mount_id] = _MountPoint(section=section)
        mount.section = section

        mount.generation += 1
        cycle = mount.generation
        set_log_context(cycle=cycle, mount=mount_id)
        try:
            mount.state = MountState.ACTIVATING
            section.replace_children(*loading_placeholder())
            mount.state = MountState.RENDERING
            result = await self._run_cycle(mount, cycle)
        finally:
            clear_log_context()
        if not result.stale:
            mount.history.append(result)
        return result

    async def _run_cycle(self, mount: _MountPoint, cycle: int) -> RenderCycleResult:
        try:
            records = await self.source.fetch_all()
        except Exception as e:
            if self._is_stale(mount, cycle):
                return self._drop_stale(cycle)
            return self._fail(mount, cycle, e)

        if self._is_stale(mount, cycle):
            return self._drop_stale(cycle)

        logger.info("Calculating and rendering statistics...")
        mount.section.replace_children(chart_grid([TAGS_CHART_ID, YEAR_CHART_ID]))
        try:
            failures = render_stats_charts_workflow(
                records,
                self.sink,
                tags_mount_id=TAGS_CHART_ID,
                year_mount_id=YEAR_CHART_ID,
                tag_limit=self.cfg.tag_chart_limit,
            )
        except Exception as e:
            return self._fail(mount, cycle, e)

        mount.state = MountState.RENDERED
        logger.info(f"Rendered statistics for {len(records)} records")
        return RenderCycleResult(
            cycle=cycle,
            state=MountState.RENDERED,
            record_count=len(records),
            chart_failures=failures,
        )

    def _is_stale(self, mount: _MountPoint, cycle: int) -> bool:
        return cycle != mount.generation

    def _drop_stale(self, cycle: int) -> RenderCycleResult:
        logger.debug(f"Dropping stale completion of cycle {cycle}")
        return RenderCycleResult(cycle=cycle, state=MountState.RENDERING, stale=True)

    def _fail(self, mount: _MountPoint, cycle: int, error: Exception) -> RenderCycleResult:
        logger.error(f"Error loading statistics: {error}", exc_info=error)
        mount.section.replace_children(*error_panel(str(error)))
        mount.state = MountState.ERRORED
        return RenderCycleResult(cycle=cycle, state=MountState.ERRORED, error=str(error))
