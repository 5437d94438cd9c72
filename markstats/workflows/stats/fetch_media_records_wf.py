"""Workflow for fetching every media record with a mark count.

Runs one find* query per item kind concurrently, waits for all of them, then
normalizes and concatenates the results in query order (scenes, then images).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from markstats.components.graphql.media_queries import MEDIA_QUERIES, MediaQuery
from markstats.components.stats.record_normalization_comp import normalize_many
from markstats.helpers.dto.stats_dto import Record

if TYPE_CHECKING:
    from markstats.components.graphql.graphql_client_comp import FindResult, GraphQLClient

logger = logging.getLogger(__name__)


async def fetch_media_records_workflow(
    client: GraphQLClient,
    queries: Sequence[MediaQuery] = MEDIA_QUERIES,
) -> list[Record]:
    """Fetch and normalize records for every item kind.

    The blocking client calls run in worker threads; their relative order is
    unspecified. If any fetch fails the whole workflow fails and no partial
    collection is returned.

    Args:
        client: GraphQL client for the catalog
        queries: One MediaQuery per item kind

    Returns:
        Records of all kinds, in query order

    Raises:
        AcquisitionError: If any fetch fails
    """
    for query in queries:
        logger.info(f"Fetching {query.kind.value}s with mark count > 0...")

    results: list[FindResult] = await asyncio.gather(
        *(
            asyncio.to_thread(client.find, q.query, q.variables(), q.result_field, q.items_field)
            for q in queries
        )
    )

    records: list[Record] = []
    for query, result in zip(queries, results):
        logger.info(f"Found {result.count} {query.kind.value}s")
        records.extend(normalize_many(result.items, query.kind))

    logger.info(f"Data fetched and combined ({len(records)} records)")
    return records
