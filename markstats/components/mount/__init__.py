"""
Mount components: the in-memory host page the statistics view writes into.
"""

from .stats_layout_comp import SECTION_ID, TAGS_CHART_ID, YEAR_CHART_ID, find_or_create_section
from .surface_comp import Document, Element

__all__ = [
    "SECTION_ID",
    "TAGS_CHART_ID",
    "YEAR_CHART_ID",
    "Document",
    "Element",
    "find_or_create_section",
]
