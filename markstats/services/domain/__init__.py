"""Domain services."""

from .media_stats_svc import MediaStatsConfig, MediaStatsService

__all__ = ["MediaStatsConfig", "MediaStatsService"]
