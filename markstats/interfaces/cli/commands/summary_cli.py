"""
Summary command: fetch records and print both aggregations as tables.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from markstats.components.stats.stats_aggregation_comp import mark_count_by_year, tag_frequency
from markstats.helpers.exceptions import AcquisitionError
from markstats.interfaces.cli.ui import console, print_error, show_table
from markstats.services.config_svc import ConfigService
from markstats.services.domain.media_stats_svc import MediaStatsConfig, MediaStatsService

logger = logging.getLogger(__name__)


def cmd_summary(args: argparse.Namespace, config: ConfigService) -> int:
    """Print mark count by tag and by year."""
    limit = args.limit if args.limit is not None else int(config.get("tag_chart_limit", 15))
    service = MediaStatsService(
        MediaStatsConfig(
            graphql_url=str(config.get("graphql_url")),
            request_timeout=float(config.get("request_timeout", 30)),
        )
    )
    try:
        with console.status("[bold cyan]Fetching records...[/bold cyan]"):
            records = asyncio.run(service.fetch_all())
    except AcquisitionError as e:
        print_error(f"Error loading statistics: {e}")
        return 1
    finally:
        service.close()

    tags = tag_frequency(records, limit)
    years = mark_count_by_year(records)

    console.print(f"[dim]{len(records)} records with a mark count[/dim]")
    show_table("Mark Count by Tag", ["Tag", "Items"], [(e.tag_name, e.occurrence_count) for e in tags])
    show_table("Mark Count by Year of Media", ["Year", "Total"], [(b.year_label, b.summed_mark_count) for b in years])
    return 0
