"""
Application composition root and the idempotent bootstrap entry point.

The Application owns every long-lived object for one host page:
- ConfigService
- MediaStatsService (data acquisition facade)
- ChartSink (+ Chart.js backend when configured)
- MountCoordinatorService (stats page lifecycle)
- StatsButtonService (navbar button + modal, optional)

bootstrap() is the single entry point. It keeps a module-scoped registry keyed
by plugin id: the first call for an id builds and starts an Application, every
later call logs that the plugin is already loaded and returns the existing
instance without registering anything. Check and set happen with no await in
between, so two bootstraps on one event loop cannot both pass the check. The
registry is never cleared for the life of the process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from markstats.components.charting.chart_sink_comp import ChartSink
from markstats.components.charting.chartjs_backend_comp import ChartJsBackend
from markstats.components.events.navigation_channel_comp import NavigationChannel
from markstats.components.mount.surface_comp import Document
from markstats.helpers.dto.lifecycle_dto import RenderCycleResult
from markstats.services.config_svc import ConfigService
from markstats.services.domain.media_stats_svc import MediaStatsConfig, MediaStatsService
from markstats.services.infrastructure.mount_coordinator_svc import (
    MountCoordinatorConfig,
    MountCoordinatorService,
    RecordSource,
)
from markstats.services.infrastructure.stats_button_svc import StatsButtonConfig, StatsButtonService

logger = logging.getLogger(__name__)


@dataclass
class HostPage:
    """The page the statistics view is injected into."""

    document: Document
    navigation: NavigationChannel | None = None
    initial_path: str = "/"

    @property
    def current_path(self) -> str:
        if self.navigation is not None:
            return self.navigation.current_path
        return self.initial_path


class Application:
    """
    Dependency container and lifecycle manager for one host page.

    Access services via application.get_service("name").
    """

    def __init__(
        self,
        host: HostPage,
        config_service: ConfigService | None = None,
        source: RecordSource | None = None,
    ) -> None:
        """
        Build all services from configuration.

        Args:
            host: Page to inject into
            config_service: Configuration (defaults → YAML → env when omitted)
            source: Record source override; defaults to a MediaStatsService on graphql_url
        """
        self.host = host
        self._config_service = config_service or ConfigService()
        cfg = self._config_service.get_config()

        self.plugin_id: str = str(cfg["plugin_id"])
        self.stats_path: str = str(cfg["stats_path"])
        self.tag_chart_limit: int = int(cfg["tag_chart_limit"])
        self.chartjs_url: str | None = cfg.get("chartjs_url") or None

        self.services: dict[str, Any] = {"config": self._config_service}

        if source is None:
            stats_service = MediaStatsService(
                MediaStatsConfig(graphql_url=str(cfg["graphql_url"]), request_timeout=float(cfg["request_timeout"]))
            )
            self.services["media_stats"] = stats_service
            source = stats_service
        self.source = source

        backend = ChartJsBackend(host.document, self.chartjs_url) if self.chartjs_url else None
        self.sink = ChartSink(host.document, backend)

        self.coordinator = MountCoordinatorService(
            MountCoordinatorConfig(
                stats_path=self.stats_path,
                anchor_selector=str(cfg["anchor_selector"]),
                tag_chart_limit=self.tag_chart_limit,
            ),
            source=self.source,
            sink=self.sink,
        )
        self.services["mount_coordinator"] = self.coordinator

        button_cfg = cfg.get("stats_button") or {}
        self.button_service: StatsButtonService | None = None
        if button_cfg.get("enabled", True):
            self.button_service = StatsButtonService(
                StatsButtonConfig(
                    parent_selector=str(button_cfg.get("parent_selector", ".navbar-buttons")),
                    poll_interval=float(button_cfg.get("poll_interval", 1.0)),
                    debounce=float(button_cfg.get("debounce", 0.25)),
                    tag_limit=self.tag_chart_limit,
                ),
                document=host.document,
                source=self.source,
                sink=self.sink,
            )
            self.services["stats_button"] = self.button_service

        self._running = False

    def get_service(self, name: str) -> Any:
        """Return a registered service; raises KeyError for unknown names."""
        return self.services[name]

    def is_running(self) -> bool:
        return self._running

    async def start(self) -> RenderCycleResult | None:
        """
        Arm the stats page listener (or run the fallback check) and start the button watcher.

        Returns:
            Result of the fallback render when one happened, else None
        """
        logger.info(f"[Application] {self.plugin_id} started")
        result = await self.coordinator.load(self.host.document, self.host.navigation, self.host.current_path)
        if self.button_service is not None:
            self.button_service.start()
        self._running = True
        logger.info(f"[Application] {self.plugin_id} fully initialized")
        return result

    async def stop(self) -> None:
        if self.button_service is not None:
            await self.button_service.stop()
        if self.host.navigation is not None and self.coordinator.listener_id is not None:
            self.host.navigation.unsubscribe(self.coordinator.listener_id)
        self.sink.dispose_all()
        stats_service = self.services.get("media_stats")
        if stats_service is not None:
            stats_service.close()
        self._running = False
        logger.info(f"[Application] {self.plugin_id} stopped")


# Plugin id -> the one Application bootstrapped for it in this process
_LOADED_PLUGINS: dict[str, Application] = {}


async def bootstrap(
    host: HostPage,
    config_service: ConfigService | None = None,
    source: RecordSource | None = None,
) -> Application:
    """
    Single entry point: inject the statistics view into host exactly once.

    Returns:
        The Application for this plugin id (the existing one on repeat calls)
    """
    config_service = config_service or ConfigService()
    plugin_id = str(config_service.get("plugin_id", "markstats"))

    existing = _LOADED_PLUGINS.get(plugin_id)
    if existing is not None:
        logger.info(f"[Application] {plugin_id} is already loaded")
        return existing

    application = Application(host, config_service, source=source)
    _LOADED_PLUGINS[plugin_id] = application
    await application.start()
    return application


def is_loaded(plugin_id: str) -> bool:
    return plugin_id in _LOADED_PLUGINS
