"""
Navigation channel - path-element listeners for a long-lived single page.

Mirrors the host's "call me with the anchor element whenever navigation reaches
this path" facility. Listeners are registered once; every matching navigation
resolves the anchor selector against the current document and schedules the
callback on the running event loop.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from markstats.components.mount.surface_comp import Document, Element

logger = logging.getLogger(__name__)

AnchorCallback = Callable[[Element], Awaitable[Any] | Any]


@dataclass
class _PathListener:
    listener_id: str
    path: str
    selector: str
    callback: AnchorCallback


class NavigationChannel:
    """
    Registry of path listeners plus the current navigation path.

    Single-threaded: all calls are expected on the event loop thread.
    """

    def __init__(self, document: Document, initial_path: str = "/") -> None:
        self.document = document
        self.current_path = normalize_path(initial_path)
        self._listeners: dict[str, _PathListener] = {}
        self._next_listener_id = 0

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def path_element_listener(self, path: str, selector: str, callback: AnchorCallback) -> str:
        """
        Register callback for navigations to path.

        Args:
            path: Exact path to match (trailing slash ignored)
            selector: Anchor selector resolved against the document on each navigation
            callback: Called with the anchor element; may be a coroutine function

        Returns:
            Listener id for unsubscribe()
        """
        listener_id = f"listener_{self._next_listener_id}"
        self._next_listener_id += 1
        self._listeners[listener_id] = _PathListener(
            listener_id=listener_id,
            path=normalize_path(path),
            selector=selector,
            callback=callback,
        )
        logger.info(f"[NavigationChannel] {listener_id} registered for {path} ({selector})")
        return listener_id

    def unsubscribe(self, listener_id: str) -> None:
        if self._listeners.pop(listener_id, None) is not None:
            logger.info(f"[NavigationChannel] {listener_id} unsubscribed")

    def navigate(self, path: str) -> list[asyncio.Task]:
        """
        Record a client-side navigation and notify matching listeners.

        Must be called with a running event loop. Coroutine callbacks are
        scheduled as tasks and returned so callers can await them; plain
        callbacks run inline.

        Returns:
            Tasks created for coroutine callbacks
        """
        self.current_path = normalize_path(path)
        tasks: list[asyncio.Task] = []
        for listener in list(self._listeners.values()):
            if listener.path != self.current_path:
                continue
            anchor = self.document.query_selector(listener.selector)
            if anchor is None:
                logger.debug(f"[NavigationChannel] Anchor {listener.selector!r} not present for {path}")
                continue
            result = listener.callback(anchor)
            if inspect.isawaitable(result):
                tasks.append(asyncio.ensure_future(result))
        return tasks


def normalize_path(path: str) -> str:
    """Drop query, fragment and trailing slash: "/stats/?tab=1" -> "/stats"."""
    stripped = path.split("?", 1)[0].split("#", 1)[0]
    if len(stripped) > 1:
        stripped = stripped.rstrip("/")
    return stripped or "/"
