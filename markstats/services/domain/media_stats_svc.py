"""
Media stats service - the data acquisition facade.

ARCHITECTURE:
- Owns the GraphQL client (long-lived HTTP session)
- Delegates fetching/normalization to fetch_media_records_workflow
- Stateless between calls: every fetch_all() returns a fresh record list
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from markstats.components.graphql.graphql_client_comp import GraphQLClient
from markstats.components.graphql.media_queries import MEDIA_QUERIES
from markstats.helpers.dto.stats_dto import Record
from markstats.workflows.stats.fetch_media_records_wf import fetch_media_records_workflow

logger = logging.getLogger(__name__)


@dataclass
class MediaStatsConfig:
    """Configuration for MediaStatsService."""

    graphql_url: str
    request_timeout: float = 30


class MediaStatsService:
    """
    Fetches every scene and image with a mark count above zero.

    Both kinds are fetched concurrently; either failing fails the whole call.
    """

    def __init__(self, cfg: MediaStatsConfig, client: GraphQLClient | None = None) -> None:
        """
        Initialize the facade.

        Args:
            cfg: Service configuration
            client: Pre-built client (tests inject one with a fake session)
        """
        self.cfg = cfg
        self._client = client or GraphQLClient(cfg.graphql_url, timeout=cfg.request_timeout)

    async def fetch_all(self) -> list[Record]:
        """
        Fetch, normalize and merge records of both item kinds.

        Returns:
            Scene records followed by image records

        Raises:
            AcquisitionError: If either fetch fails (no partial result)
        """
        return await fetch_media_records_workflow(self._client, MEDIA_QUERIES)

    def close(self) -> None:
        self._client.close()
