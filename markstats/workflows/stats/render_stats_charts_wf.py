"""Workflows that aggregate records and hand the series to the chart sink.

Each chart is rendered in isolation: a failure drawing one chart is logged and
reported back, and never prevents the next chart from being attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from markstats.components.charting.chart_sink_comp import ChartSink
from markstats.components.stats.stats_aggregation_comp import mark_count_by_year, tag_frequency, to_series
from markstats.helpers.dto.chart_dto import TAG_PALETTE, YEAR_PALETTE, Orientation
from markstats.helpers.dto.stats_dto import ChartSeries, Record

logger = logging.getLogger(__name__)

TAGS_SERIES_LABEL = "Tag Count"
TAGS_TITLE = "Mark Count by Tag"
YEAR_SERIES_LABEL = "Total Mark Count"
YEAR_TITLE = "Mark Count by Year of Media"
COMMON_TAGS_TITLE = "Most Common Tags"


def render_stats_charts_workflow(
    records: Sequence[Record],
    sink: ChartSink,
    tags_mount_id: str,
    year_mount_id: str,
    tag_limit: int,
) -> list[str]:
    """Aggregate both series and render the tag and year charts.

    Aggregation happens up front; any aggregation error propagates to the
    caller before any chart is drawn.

    Args:
        records: Normalized records of all kinds
        sink: Chart sink bound to the host document
        tags_mount_id: Canvas id for the tag chart
        year_mount_id: Canvas id for the year chart
        tag_limit: Maximum number of tags shown

    Returns:
        Mount ids of charts that failed to render (empty on full success)
    """
    tags = to_series(tag_frequency(records, tag_limit))
    years = to_series(mark_count_by_year(records))
    logger.info(f"Calculated {len(tags.labels)} tag bars and {len(years.labels)} year bars")

    draws: list[tuple[str, Callable[[], None]]] = [
        (
            tags_mount_id,
            lambda: sink.render(
                tags_mount_id, tags.labels, tags.values, TAGS_SERIES_LABEL, TAGS_TITLE,
                Orientation.HORIZONTAL, TAG_PALETTE,
            ),
        ),
        (
            year_mount_id,
            lambda: sink.render(
                year_mount_id, years.labels, years.values, YEAR_SERIES_LABEL, YEAR_TITLE,
                Orientation.VERTICAL, YEAR_PALETTE,
            ),
        ),
    ]
    return _draw_isolated(draws)


def render_common_tags_chart_workflow(
    records: Sequence[Record],
    sink: ChartSink,
    mount_id: str,
    tag_limit: int,
) -> ChartSeries:
    """Render the "Most Common Tags" chart used by the statistics modal.

    Bars are reversed so the most common tag ends up at the top of the
    horizontal chart.

    Returns:
        The series as drawn
    """
    series = to_series(tag_frequency(records, tag_limit)).reversed()
    sink.render(mount_id, series.labels, series.values, TAGS_SERIES_LABEL, COMMON_TAGS_TITLE, Orientation.HORIZONTAL, TAG_PALETTE)
    return series


def _draw_isolated(draws: list[tuple[str, Callable[[], None]]]) -> list[str]:
    failures: list[str] = []
    for mount_id, draw in draws:
        try:
            draw()
        except Exception as e:
            logger.exception(f"Failed to render chart {mount_id}: {e}")
            failures.append(mount_id)
    return failures
