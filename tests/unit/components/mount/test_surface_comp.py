"""Unit tests for the host page element tree."""

from __future__ import annotations

import pytest

from markstats.components.mount.stats_layout_comp import (
    ERROR_HEADING,
    LOADING_TEXT,
    SECTION_ID,
    chart_grid,
    error_panel,
    find_or_create_section,
    loading_placeholder,
)
from markstats.components.mount.surface_comp import Document, Element


class TestSelectors:
    @pytest.mark.unit
    def test_descendant_selector(self, host_document: Document) -> None:
        anchor = host_document.query_selector("div.container-fluid div.mt-5")

        assert anchor is not None
        assert anchor.classes == ["mt-5"]
        assert anchor.parent.classes == ["container-fluid"]

    @pytest.mark.unit
    def test_class_only_selector(self, host_document: Document) -> None:
        assert host_document.query_selector(".navbar-buttons") is not None

    @pytest.mark.unit
    def test_no_match(self, host_document: Document) -> None:
        assert host_document.query_selector("div.missing") is None

    @pytest.mark.unit
    def test_ancestor_must_match_in_order(self, host_document: Document) -> None:
        assert host_document.query_selector("div.mt-5 div.container-fluid") is None

    @pytest.mark.unit
    def test_id_selector(self) -> None:
        document = Document()
        document.body.append_child(Element("p", id="x"))

        assert document.query_selector("#x") is document.get_element_by_id("x")

    @pytest.mark.unit
    def test_unsupported_selector_raises(self, host_document: Document) -> None:
        with pytest.raises(ValueError):
            host_document.query_selector("div > p")


class TestMutation:
    @pytest.mark.unit
    def test_append_moves_child(self) -> None:
        a, b, child = Element("div"), Element("div"), Element("span")
        a.append_child(child)
        b.append_child(child)

        assert a.children == []
        assert child.parent is b

    @pytest.mark.unit
    def test_replace_children(self) -> None:
        parent = Element("div", text="old", children=[Element("span")])
        old = parent.children[0]

        parent.replace_children(Element("p", text="new"))

        assert old.parent is None
        assert parent.text_content() == "new"

    @pytest.mark.unit
    def test_remove_is_idempotent(self) -> None:
        parent = Element("div", children=[Element("span")])
        child = parent.children[0]
        child.remove()
        child.remove()

        assert not child.is_attached

    @pytest.mark.unit
    def test_click_listeners_run_in_order(self) -> None:
        button = Element("button")
        button.add_click_listener(lambda el: 1)
        button.add_click_listener(lambda el: el.tag)

        assert button.click() == [1, "button"]


class TestSerialization:
    @pytest.mark.unit
    def test_text_is_escaped(self) -> None:
        assert Element("p", text="<b>").to_html() == "<p>&lt;b&gt;</p>"

    @pytest.mark.unit
    def test_raw_text_is_not_escaped(self) -> None:
        assert Element("script", raw_text="a < b").to_html() == "<script>a < b</script>"

    @pytest.mark.unit
    def test_attributes(self) -> None:
        html = Element("div", id="d", classes=["a", "b"], style={"color": "red"}, attrs={"data-x": "1"}).to_html()

        assert html == '<div id="d" class="a b" style="color:red" data-x="1"></div>'

    @pytest.mark.unit
    def test_document_has_doctype_and_title(self) -> None:
        html = Document(title="Stats").to_html()

        assert html.startswith("<!DOCTYPE html>\n<html>")
        assert "<title>Stats</title>" in html

    @pytest.mark.unit
    def test_serialization_does_not_mutate(self) -> None:
        document = Document(title="Stats")
        first = document.to_html()

        assert document.to_html() == first


class TestStatsLayout:
    @pytest.mark.unit
    def test_section_created_once(self, anchor: Element) -> None:
        first = find_or_create_section(anchor)
        second = find_or_create_section(anchor)

        assert first is second
        assert [c.id for c in anchor.children] == [SECTION_ID]

    @pytest.mark.unit
    def test_loading_placeholder(self) -> None:
        assert LOADING_TEXT in "".join(e.text_content() for e in loading_placeholder())

    @pytest.mark.unit
    def test_chart_grid_has_one_canvas_per_id(self) -> None:
        grid = chart_grid(["one", "two"])

        canvases = list(grid.query_selector_all("canvas"))
        assert [c.id for c in canvases] == ["one", "two"]

    @pytest.mark.unit
    def test_error_panel(self) -> None:
        heading, message = error_panel("boom")

        assert heading.text == ERROR_HEADING
        assert heading.style["color"] == "red"
        assert message.text == "boom"
