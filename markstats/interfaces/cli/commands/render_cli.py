"""
Render command: build a standalone stats page and write it as HTML.

The page reproduces the host layout the plugin mounts into
("div.container-fluid div.mt-5"), navigates to the stats path once and
serializes the result.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from markstats.app import HostPage, bootstrap
from markstats.components.events.navigation_channel_comp import NavigationChannel
from markstats.components.mount.stats_layout_comp import SECTION_ID
from markstats.components.mount.surface_comp import Document, Element
from markstats.helpers.dto.lifecycle_dto import MountState
from markstats.interfaces.cli.ui import InfoPanel, print_error, print_warning
from markstats.services.config_svc import ConfigService

logger = logging.getLogger(__name__)


def build_standalone_page(title: str) -> Document:
    """Empty page with the host's stats anchor."""
    document = Document(title=title)
    document.head.append_child(Element("meta", attrs={"charset": "utf-8"}))
    document.body.style.update({"background-color": "#121212", "color": "#ccc"})
    document.body.append_child(
        Element("div", classes=["container-fluid"], children=[Element("div", classes=["mt-5"])])
    )
    return document


async def render_page(config: ConfigService) -> tuple[str, MountState]:
    """Bootstrap into a fresh page, navigate to the stats path and serialize the rendered page.

    Serialized before stop(), which disposes the chart scripts.
    """
    document = build_standalone_page("Mark Count Statistics")
    channel = NavigationChannel(document)
    application = await bootstrap(HostPage(document=document, navigation=channel), config)
    try:
        await asyncio.gather(*channel.navigate(application.stats_path))
        state = application.coordinator.state_of(SECTION_ID)
        page = document.to_html()
    finally:
        await application.stop()
    return page, state


def cmd_render(args: argparse.Namespace, config: ConfigService) -> int:
    """Write the stats page to args.out."""
    page, state = asyncio.run(render_page(config))
    out = Path(args.out)
    try:
        out.write_text(page, encoding="utf-8")
    except OSError as e:
        print_error(f"Could not write {out}: {e}")
        return 1

    if state is MountState.ERRORED:
        print_warning(f"Statistics failed to load; error page written to {out}")
        return 1
    InfoPanel.show("Render", f"Stats page written to {out}", "green")
    return 0
