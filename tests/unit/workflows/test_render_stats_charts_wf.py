"""Unit tests for the chart rendering workflows."""

from __future__ import annotations

from datetime import date

import pytest

from markstats.components.charting.chart_sink_comp import ChartSink
from markstats.components.mount.stats_layout_comp import TAGS_CHART_ID, YEAR_CHART_ID, chart_canvas, chart_grid
from markstats.components.mount.surface_comp import Document
from markstats.workflows.stats.render_stats_charts_wf import (
    COMMON_TAGS_TITLE,
    TAGS_TITLE,
    YEAR_TITLE,
    render_common_tags_chart_workflow,
    render_stats_charts_workflow,
)
from tests.fixtures.fakes import RecordingBackend


@pytest.fixture
def document() -> Document:
    document = Document()
    document.body.append_child(chart_grid([TAGS_CHART_ID, YEAR_CHART_ID]))
    return document


@pytest.fixture
def records(make_record):
    return [
        make_record(id="1", mark_count=3, occurred_on=date(2020, 5, 1), tags=["A", "B"]),
        make_record(id="2", mark_count=2, occurred_on=date(2020, 11, 1), tags=["A"]),
        make_record(id="3", mark_count=5, occurred_on=None, tags=["B"]),
    ]


@pytest.mark.unit
def test_renders_both_charts(document: Document, records) -> None:
    backend = RecordingBackend()

    failures = render_stats_charts_workflow(records, ChartSink(document, backend), TAGS_CHART_ID, YEAR_CHART_ID, 15)

    assert failures == []
    tags, years = backend.created
    assert tags.canvas_id == TAGS_CHART_ID
    assert tags.config["data"]["labels"] == ["A", "B"]
    assert tags.config["data"]["datasets"][0]["data"] == [2, 2]
    assert tags.config["options"]["plugins"]["title"]["text"] == TAGS_TITLE
    assert tags.config["options"]["indexAxis"] == "y"
    assert years.config["data"]["labels"] == ["2020", "Unknown"]
    assert years.config["data"]["datasets"][0]["data"] == [5, 5]
    assert years.config["options"]["plugins"]["title"]["text"] == YEAR_TITLE
    assert years.config["options"]["indexAxis"] == "x"


@pytest.mark.unit
def test_failed_chart_does_not_block_the_other(document: Document, records) -> None:
    backend = RecordingBackend(fail_on={TAGS_CHART_ID})

    failures = render_stats_charts_workflow(records, ChartSink(document, backend), TAGS_CHART_ID, YEAR_CHART_ID, 15)

    assert failures == [TAGS_CHART_ID]
    assert [h.canvas_id for h in backend.created] == [YEAR_CHART_ID]


@pytest.mark.unit
def test_empty_records_render_empty_charts(document: Document) -> None:
    backend = RecordingBackend()

    render_stats_charts_workflow([], ChartSink(document, backend), TAGS_CHART_ID, YEAR_CHART_ID, 15)

    assert [h.config["data"]["labels"] for h in backend.created] == [[], []]


@pytest.mark.unit
def test_common_tags_are_reversed(make_record) -> None:
    document = Document()
    document.body.append_child(chart_canvas("common"))
    backend = RecordingBackend()
    records = [make_record(id="1", tags=["A", "B"]), make_record(id="2", tags=["A"])]

    series = render_common_tags_chart_workflow(records, ChartSink(document, backend), "common", 15)

    assert series.labels == ["B", "A"]
    assert backend.created[0].config["data"]["labels"] == ["B", "A"]
    assert backend.created[0].config["options"]["plugins"]["title"]["text"] == COMMON_TAGS_TITLE
