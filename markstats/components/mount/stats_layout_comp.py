"""
Stats section markup: container, loading placeholder, chart grid and error panel.

Pure presentation. Builders return fresh elements; only the mount coordinator
and the stats modal install them into the page.
"""

from __future__ import annotations

from markstats.components.mount.surface_comp import Element

SECTION_ID = "markstats-section"
TAGS_CHART_ID = "markCountByTagsChart"
YEAR_CHART_ID = "markCountByYearChart"
HEADER_TEXT = "Mark Count Statistics"
LOADING_TEXT = "Loading statistics..."
ERROR_HEADING = "Error loading statistics:"

SECTION_STYLE = {
    "background-color": "#1e1e1e",
    "padding": "20px",
    "border-radius": "8px",
    "margin-top": "20px",
    "box-shadow": "0 0 10px rgba(0,0,0,0.3)",
}


def find_or_create_section(anchor: Element) -> Element:
    """Return the stats container under anchor, creating it on first use."""
    section = anchor.get_element_by_id(SECTION_ID)
    if section is None:
        section = anchor.append_child(Element("div", id=SECTION_ID, style=SECTION_STYLE))
    return section


def header() -> Element:
    return Element("h2", text=HEADER_TEXT, style={"text-align": "center"})


def loading_placeholder() -> list[Element]:
    return [header(), Element("p", text=LOADING_TEXT)]


def chart_canvas(canvas_id: str, height: str = "400px") -> Element:
    return Element(
        "div",
        style={"position": "relative", "height": height},
        children=[Element("canvas", id=canvas_id)],
    )


def chart_grid(canvas_ids: list[str]) -> Element:
    """Two-column grid with one canvas per cell."""
    cells = [Element("div", classes=["col-md-6", "mb-3"], children=[chart_canvas(cid)]) for cid in canvas_ids]
    return Element("div", children=[header(), Element("div", classes=["row"], children=cells)])


def error_panel(message: str) -> list[Element]:
    return [Element("h2", text=ERROR_HEADING, style={"color": "red"}), Element("p", text=message)]
