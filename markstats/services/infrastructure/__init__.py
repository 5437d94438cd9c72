"""Infrastructure services: host page lifecycle."""

from .mount_coordinator_svc import MountCoordinatorConfig, MountCoordinatorService
from .stats_button_svc import StatsButtonConfig, StatsButtonService

__all__ = [
    "MountCoordinatorConfig",
    "MountCoordinatorService",
    "StatsButtonConfig",
    "StatsButtonService",
]
