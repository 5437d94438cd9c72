"""
Aggregation engine - pure, side-effect-free transforms over normalized records.

PURE LEAF-DOMAIN:
- Take Records as input, return ordered chart-ready entries
- No network, no host page access
- The only side effect is an operator-facing log line for unparsable dates
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from markstats.helpers.dto.stats_dto import (
    UNKNOWN_YEAR,
    ChartSeries,
    InvalidDate,
    Record,
    TagFrequencyEntry,
    YearBucket,
)

logger = logging.getLogger(__name__)


def tag_frequency(records: Iterable[Record], limit: int) -> list[TagFrequencyEntry]:
    """
    Count how many times each tag name occurs across the records.

    Counts occurrences, not mark weight: records with mark_count=None still count.
    Names are matched exactly (case-sensitive). Repeated tags within one record
    are each counted.

    Args:
        records: Records in input order
        limit: Maximum number of entries to return

    Returns:
        Entries sorted by count descending; ties keep first-encountered order
    """
    if limit <= 0:
        return []

    # dict preserves insertion order and sorted() is stable, so ties stay in encounter order
    counts: dict[str, int] = {}
    for record in records:
        for tag in record.tags:
            counts[tag.name] = counts.get(tag.name, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [TagFrequencyEntry(tag_name=name, occurrence_count=count) for name, count in ranked[:limit]]


def mark_count_by_year(records: Iterable[Record]) -> list[YearBucket]:
    """
    Sum mark counts per release year.

    Records with mark_count=None are skipped. A zero mark count still creates
    its bucket. Records without a date, or with an unparsable one, go to the
    "Unknown" bucket.

    Returns:
        Buckets ascending by year label, "Unknown" always last
    """
    sums: dict[str, int] = {}
    for record in records:
        if record.mark_count is None:
            continue

        label = UNKNOWN_YEAR
        occurred_on = record.occurred_on
        if isinstance(occurred_on, InvalidDate):
            logger.warning(f"Failed to parse date for item {record.id}: {occurred_on.raw!r}")
        elif occurred_on is not None:
            label = f"{occurred_on.year:04d}"

        sums[label] = sums.get(label, 0) + record.mark_count

    ordered = sorted(sums.items(), key=lambda item: (item[0] == UNKNOWN_YEAR, item[0]))
    return [YearBucket(year_label=label, summed_mark_count=total) for label, total in ordered]


def to_series(entries: Sequence[TagFrequencyEntry | YearBucket]) -> ChartSeries:
    """Split aggregation entries into parallel label/value lists."""
    labels: list[str] = []
    values: list[int] = []
    for entry in entries:
        if isinstance(entry, TagFrequencyEntry):
            labels.append(entry.tag_name)
            values.append(entry.occurrence_count)
        else:
            labels.append(entry.year_label)
            values.append(entry.summed_mark_count)
    return ChartSeries(labels=labels, values=values)
