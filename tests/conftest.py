"""
Pytest fixtures and configuration for the test suite.

Strategy:
- No network: the GraphQL session is a MagicMock, record sources are in-memory fakes
- Each test gets a clean bootstrap registry and no MARKSTATS_* environment
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

# Add project root to path so tests can import markstats package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from markstats.components.mount.surface_comp import Document, Element  # noqa: E402
from markstats.helpers.dto.stats_dto import ItemKind, Record, Tag  # noqa: E402
from tests.fixtures.fakes import make_response  # noqa: E402


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate tests from MARKSTATS_* env vars, local config files and the bootstrap registry."""
    for key in list(os.environ):
        if key.startswith("MARKSTATS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    import markstats.app as app_module

    monkeypatch.setattr(app_module, "_LOADED_PLUGINS", {})


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory for Records; tags are given as names."""

    def _make(
        id: str = "1",
        mark_count: int | None = 1,
        occurred_on: Any = None,
        tags: tuple[str, ...] | list[str] = (),
        kind: ItemKind = ItemKind.SCENE,
    ) -> Record:
        return Record(
            id=id,
            kind=kind,
            mark_count=mark_count,
            occurred_on=occurred_on,
            tags=tuple(Tag(id=None, name=name) for name in tags),
        )

    return _make


@pytest.fixture
def host_document() -> Document:
    """A page shaped like the host app: navbar buttons plus the stats anchor."""
    document = Document(title="Catalog")
    document.body.append_child(
        Element("nav", classes=["navbar"], children=[Element("div", classes=["navbar-buttons"])])
    )
    document.body.append_child(
        Element("div", classes=["container-fluid"], children=[Element("div", classes=["mt-5"])])
    )
    return document


@pytest.fixture
def anchor(host_document: Document) -> Element:
    element = host_document.query_selector("div.container-fluid div.mt-5")
    assert element is not None
    return element


@pytest.fixture
def raw_scenes() -> list[dict[str, Any]]:
    return [
        {"id": "1", "o_counter": 3, "date": "2020-05-01", "tags": [{"id": "10", "name": "A"}, {"id": "11", "name": "B"}]},
        {"id": "2", "o_counter": 2, "date": "2020-11-01", "tags": [{"id": "10", "name": "A"}]},
    ]


@pytest.fixture
def raw_images() -> list[dict[str, Any]]:
    return [
        {"id": "1", "o_counter": 5, "date": None, "tags": [{"id": "11", "name": "B"}]},
    ]


@pytest.fixture
def catalog_session(raw_scenes, raw_images) -> MagicMock:
    """requests.Session mock answering findScenes/findImages by query text."""

    def post(url, json=None, headers=None, timeout=None):
        query = json["query"]
        if "findScenes" in query:
            return make_response(payload={"data": {"findScenes": {"count": len(raw_scenes), "scenes": raw_scenes}}})
        return make_response(payload={"data": {"findImages": {"count": len(raw_images), "images": raw_images}}})

    session = MagicMock()
    session.post.side_effect = post
    return session
