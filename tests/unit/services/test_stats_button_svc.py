"""Unit tests for StatsButtonService (navbar button + statistics modal)."""

from __future__ import annotations

import asyncio

import pytest

from markstats.components.charting.chart_sink_comp import ChartSink
from markstats.components.mount.surface_comp import Document
from markstats.helpers.exceptions import ProtocolError
from markstats.services.infrastructure.stats_button_svc import (
    BUTTON_ID,
    MODAL_BODY_ID,
    MODAL_CHART_ID,
    MODAL_ID,
    StatsButtonConfig,
    StatsButtonService,
)
from markstats.workflows.stats.render_stats_charts_wf import COMMON_TAGS_TITLE
from tests.fixtures.fakes import FakeSource, GatedSource, RecordingBackend


def _service(document: Document, source, **cfg) -> tuple[StatsButtonService, RecordingBackend]:
    backend = RecordingBackend()
    service = StatsButtonService(StatsButtonConfig(**cfg), document, source, ChartSink(document, backend))
    return service, backend


class TestButtonInjection:
    @pytest.mark.unit
    def test_injects_after_quiet_period(self, host_document) -> None:
        service, _ = _service(host_document, FakeSource(), debounce=0.25)

        assert service.check(0.0) is False
        assert service.check(0.1) is False
        assert service.check(0.3) is True

        button = host_document.get_element_by_id(BUTTON_ID)
        assert button is not None
        assert button.parent is host_document.query_selector(".navbar-buttons")
        assert button.text == "Statistics"

    @pytest.mark.unit
    def test_never_injects_twice(self, host_document) -> None:
        service, _ = _service(host_document, FakeSource(), debounce=0.0)

        assert service.check(0.0) is True
        assert service.check(1.0) is False
        assert service.injections == 1

    @pytest.mark.unit
    def test_reinjects_after_navbar_rerender(self, host_document) -> None:
        service, _ = _service(host_document, FakeSource(), debounce=0.25)
        service.check(0.0)
        service.check(0.5)

        host_document.query_selector(".navbar-buttons").replace_children()

        assert service.check(1.0) is False
        assert service.check(1.3) is True
        assert service.injections == 2

    @pytest.mark.unit
    def test_missing_parent_resets_debounce(self, host_document) -> None:
        service, _ = _service(host_document, FakeSource(), debounce=0.25)
        navbar = host_document.query_selector("nav.navbar")
        parent = navbar.children[0]

        service.check(0.0)
        parent.remove()
        assert service.check(0.5) is False
        navbar.append_child(parent)

        assert service.check(0.6) is False
        assert service.check(0.9) is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_poll_loop_start_stop(self, host_document) -> None:
        service, _ = _service(host_document, FakeSource(), poll_interval=0.01, debounce=0.0)

        service.start()
        assert service.is_running
        await asyncio.sleep(0.05)
        await service.stop()

        assert not service.is_running
        assert host_document.get_element_by_id(BUTTON_ID) is not None


class TestModal:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_renders_most_common_tags(self, host_document, make_record) -> None:
        records = [make_record(id="1", tags=["A", "B"]), make_record(id="2", tags=["A"])]
        service, backend = _service(host_document, FakeSource(records))

        backdrop = await service.show_modal()

        assert backdrop.is_attached
        body = host_document.get_element_by_id(MODAL_BODY_ID)
        assert body.children[0].text == COMMON_TAGS_TITLE
        assert host_document.get_element_by_id(MODAL_CHART_ID) is not None
        assert backend.created[0].config["data"]["labels"] == ["B", "A"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fetch_error_is_shown_in_modal(self, host_document) -> None:
        service, backend = _service(host_document, FakeSource(error=ProtocolError("GraphQL query failed: []")))

        await service.show_modal()

        body = host_document.get_element_by_id(MODAL_BODY_ID)
        assert body.text_content() == "Error loading statistics: GraphQL query failed: []"
        assert body.children[0].style["color"] == "red"
        assert backend.created == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_result_after_close_is_dropped(self, host_document, make_record) -> None:
        source = GatedSource([[make_record(tags=["A"])]])
        service, backend = _service(host_document, source)

        task = asyncio.ensure_future(service.show_modal())
        await source.wait_for_calls(1)
        close_button = host_document.get_element_by_id(MODAL_ID).query_selector("button.close-modal-btn")
        close_button.click()
        source.gates[0].set()
        backdrop = await task

        assert not backdrop.is_attached
        assert host_document.get_element_by_id(f"{MODAL_ID}-backdrop") is None
        assert backend.created == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_reopening_replaces_modal(self, host_document) -> None:
        service, _ = _service(host_document, FakeSource())

        await service.show_modal()
        await service.show_modal()

        backdrops = [c for c in host_document.body.children if c.id == f"{MODAL_ID}-backdrop"]
        assert len(backdrops) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_button_click_opens_modal(self, host_document, make_record) -> None:
        service, backend = _service(host_document, FakeSource([make_record(tags=["A"])]), debounce=0.0)
        service.check(0.0)

        (future,) = host_document.get_element_by_id(BUTTON_ID).click()
        await future

        assert host_document.get_element_by_id(f"{MODAL_ID}-backdrop") is not None
        assert len(backend.created) == 1


class TestModalDismissAndTasks:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_backdrop_click_closes_modal(self, host_document) -> None:
        service, _ = _service(host_document, FakeSource())
        backdrop = await service.show_modal()

        host_document.get_element_by_id(MODAL_ID).click()
        assert backdrop.is_attached

        backdrop.click()
        assert not backdrop.is_attached

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_click_task_is_held_until_done(self, host_document, make_record) -> None:
        source = GatedSource([[make_record(tags=["A"])]])
        service, backend = _service(host_document, source, debounce=0.0)
        service.check(0.0)

        host_document.get_element_by_id(BUTTON_ID).click()
        await source.wait_for_calls(1)
        assert len(service._modal_tasks) == 1

        (task,) = service._modal_tasks
        source.gates[0].set()
        await task
        await asyncio.sleep(0)

        assert service._modal_tasks == set()
        assert len(backend.created) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stop_cancels_open_modal_fetch(self, host_document, make_record) -> None:
        source = GatedSource([[make_record(tags=["A"])]])
        service, backend = _service(host_document, source, debounce=0.0)
        service.check(0.0)

        (task,) = host_document.get_element_by_id(BUTTON_ID).click()
        await source.wait_for_calls(1)
        await service.stop()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert backend.created == []
