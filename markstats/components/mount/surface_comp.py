"""
Host page surface - a small element tree standing in for the host application's DOM.

Supports exactly what the statistics view needs:
- lookup by id and by simple descendant selectors ("div.container-fluid div.mt-5")
- replacing an element's children (the innerHTML writes of a render cycle)
- click listeners for injected buttons
- HTML serialization so a page can be written to disk
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable, Iterator
from typing import Any

logger = logging.getLogger(__name__)

ClickListener = Callable[["Element"], Any]

_VOID_TAGS = {"br", "hr", "img", "input", "link", "meta"}
_COMPOUND_RE = re.compile(r"^(?P<tag>[a-zA-Z][\w-]*)?(?P<rest>(?:[.#][\w-]+)*)$")


class Element:
    """One node of the host page."""

    def __init__(
        self,
        tag: str,
        *,
        id: str | None = None,
        classes: list[str] | None = None,
        text: str | None = None,
        style: dict[str, str] | None = None,
        attrs: dict[str, str] | None = None,
        raw_text: str | None = None,
        children: list[Element] | None = None,
    ) -> None:
        self.tag = tag.lower()
        self.id = id
        self.classes = list(classes or [])
        self.text = text
        # raw_text is emitted unescaped (script bodies)
        self.raw_text = raw_text
        self.style = dict(style or {})
        self.attrs = dict(attrs or {})
        self.parent: Element | None = None
        self.children: list[Element] = []
        self._click_listeners: list[ClickListener] = []
        for child in children or []:
            self.append_child(child)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        cls = "".join(f".{c}" for c in self.classes)
        return f"<Element {self.tag}{ident}{cls}>"

    # ------------------------------------------------------------------
    # Tree mutation
    # ------------------------------------------------------------------

    def append_child(self, child: Element) -> Element:
        """Append child (detaching it from any previous parent) and return it."""
        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.append(child)
        return child

    def insert_after(self, reference: Element, child: Element) -> Element:
        """Insert child directly after reference, which must be a child of self."""
        if child.parent is not None:
            child.remove()
        index = self.children.index(reference)
        child.parent = self
        self.children.insert(index + 1, child)
        return child

    def replace_children(self, *children: Element) -> None:
        """Drop all current children and install the given ones."""
        for old in self.children:
            old.parent = None
        self.children = []
        self.text = None
        for child in children:
            self.append_child(child)

    def remove(self) -> None:
        """Detach this element from its parent. No-op when already detached."""
        if self.parent is None:
            return
        self.parent.children.remove(self)
        self.parent = None

    @property
    def is_attached(self) -> bool:
        return self.parent is not None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def iter_descendants(self) -> Iterator[Element]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def get_element_by_id(self, element_id: str) -> Element | None:
        for element in self.iter_descendants():
            if element.id == element_id:
                return element
        return None

    def query_selector(self, selector: str) -> Element | None:
        """Return the first descendant matching a descendant-combinator selector."""
        return next(self.query_selector_all(selector), None)

    def query_selector_all(self, selector: str) -> Iterator[Element]:
        compounds = [_parse_compound(part) for part in selector.split()]
        if not compounds:
            return iter(())
        return (el for el in self.iter_descendants() if _matches_chain(el, compounds, self))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_click_listener(self, listener: ClickListener) -> None:
        self._click_listeners.append(listener)

    def click(self) -> list[Any]:
        """Invoke click listeners in registration order and return their results."""
        return [listener(self) for listener in list(self._click_listeners)]

    # ------------------------------------------------------------------
    # Text / serialization
    # ------------------------------------------------------------------

    def text_content(self) -> str:
        parts = [self.text or ""]
        parts.extend(child.text_content() for child in self.children)
        return "".join(parts)

    def to_html(self) -> str:
        attrs: list[str] = []
        if self.id:
            attrs.append(f'id="{html.escape(self.id)}"')
        if self.classes:
            attrs.append(f'class="{html.escape(" ".join(self.classes))}"')
        if self.style:
            css = ";".join(f"{k}:{v}" for k, v in self.style.items())
            attrs.append(f'style="{html.escape(css)}"')
        for key, value in self.attrs.items():
            attrs.append(f'{key}="{html.escape(value)}"')
        opening = f"<{self.tag}{' ' if attrs else ''}{' '.join(attrs)}>"
        if self.tag in _VOID_TAGS:
            return opening
        inner = self.raw_text if self.raw_text is not None else html.escape(self.text or "")
        inner += "".join(child.to_html() for child in self.children)
        return f"{opening}{inner}</{self.tag}>"


class Document:
    """A host page: a <head> for scripts and a <body> for content."""

    def __init__(self, title: str = "") -> None:
        self.title = title
        self.head = Element("head")
        self.body = Element("body")
        self._root = Element("html", children=[self.head, self.body])
        if title:
            self.head.append_child(Element("title", text=title))

    def get_element_by_id(self, element_id: str) -> Element | None:
        return self._root.get_element_by_id(element_id)

    def query_selector(self, selector: str) -> Element | None:
        return self._root.query_selector(selector)

    def to_html(self) -> str:
        return "<!DOCTYPE html>\n" + self._root.to_html()


def _parse_compound(part: str) -> tuple[str | None, str | None, set[str]]:
    match = _COMPOUND_RE.match(part)
    if match is None:
        raise ValueError(f"Unsupported selector: {part!r}")
    tag = match.group("tag")
    element_id: str | None = None
    classes: set[str] = set()
    for token in re.findall(r"[.#][\w-]+", match.group("rest")):
        if token[0] == "#":
            element_id = token[1:]
        else:
            classes.add(token[1:])
    return (tag.lower() if tag else None, element_id, classes)


def _matches(element: Element, compound: tuple[str | None, str | None, set[str]]) -> bool:
    tag, element_id, classes = compound
    if tag and element.tag != tag:
        return False
    if element_id and element.id != element_id:
        return False
    return classes.issubset(element.classes)


def _matches_chain(
    element: Element,
    compounds: list[tuple[str | None, str | None, set[str]]],
    scope: Element,
) -> bool:
    if not _matches(element, compounds[-1]):
        return False
    remaining = compounds[:-1]
    ancestor = element.parent
    while remaining and ancestor is not None and ancestor is not scope:
        if _matches(ancestor, remaining[-1]):
            remaining = remaining[:-1]
        ancestor = ancestor.parent
    # an ancestor chain may end at the scope itself (e.g. "body div")
    if remaining and ancestor is scope and _matches(scope, remaining[-1]):
        remaining = remaining[:-1]
    return not remaining
