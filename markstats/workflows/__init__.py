"""
Workflows package - orchestration of components for one operation.
"""

from .stats.fetch_media_records_wf import fetch_media_records_workflow
from .stats.render_stats_charts_wf import render_common_tags_chart_workflow, render_stats_charts_workflow

__all__ = [
    "fetch_media_records_workflow",
    "render_common_tags_chart_workflow",
    "render_stats_charts_workflow",
]
