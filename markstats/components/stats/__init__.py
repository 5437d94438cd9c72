"""
Stats components: record normalization and pure aggregation.
"""

from .record_normalization_comp import normalize, normalize_many
from .stats_aggregation_comp import mark_count_by_year, tag_frequency, to_series

__all__ = [
    "mark_count_by_year",
    "normalize",
    "normalize_many",
    "tag_frequency",
    "to_series",
]
