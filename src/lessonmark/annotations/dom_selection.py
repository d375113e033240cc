"""Selection source over rendered field HTML.

Models the browser rule used for offset capture: the start offset of a
selection is the length of the container's text that precedes the start
point (``Range.toString()`` of a range from the container start), no matter
how that text is split across token ``<span>`` and ``<mark>`` elements.
Endpoints are addressed as ``DomPoint(text_node_index, offset)`` counted in
document order over the container's text nodes.
"""

# Pattern: Functional Core (pure DOM reads via selectolax)

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from selectolax.lexbor import LexborHTMLParser

from lessonmark.annotations.selection import SelectionSnapshot

logger = logging.getLogger(__name__)

CONTAINER_ATTR = "data-container-id"
_MARK_TAG = "mark"


@dataclass(frozen=True)
class DomPoint:
    """A boundary point: a text node (by document order) and an offset in it."""

    node_index: int
    offset: int


@dataclass
class _TextNodeInfo:
    """A text node's slice of the container's plain text."""

    text: str
    char_start: int
    char_end: int
    in_mark: bool


def _find_root(tree: LexborHTMLParser, container_id: str | None) -> Any:
    if container_id is not None:
        return tree.css_first(f'[{CONTAINER_ATTR}="{container_id}"]')
    body = tree.body
    return body if body else tree.root


def _walk_text_nodes(root: Any) -> list[_TextNodeInfo]:
    """Collect the text nodes under *root* in document order."""
    nodes: list[_TextNodeInfo] = []
    position = 0

    def _walk(node: Any, in_mark: bool) -> None:
        nonlocal position
        tag = node.tag

        # Text node: selectolax uses "-text" as the tag
        if tag == "-text":
            text = node.text_content
            if not text:
                return
            nodes.append(
                _TextNodeInfo(
                    text=text,
                    char_start=position,
                    char_end=position + len(text),
                    in_mark=in_mark,
                )
            )
            position += len(text)
            return

        inside = in_mark or tag == _MARK_TAG
        child = node.child
        while child is not None:
            _walk(child, inside)
            child = child.next

    child = root.child
    while child is not None:
        _walk(child, root.tag == _MARK_TAG)
        child = child.next
    return nodes


def extract_plain_text(html: str, container_id: str | None = None) -> str:
    """Return the plain text of *html* (or of one container in it).

    Markup is ignored and text is not whitespace-collapsed, matching what a
    ``<pre>``-style rendering exposes to the selection API.
    """
    if not html:
        return ""
    root = _find_root(LexborHTMLParser(html), container_id)
    if root is None:
        return ""
    return "".join(n.text for n in _walk_text_nodes(root))


class HtmlSelectionSource:
    """``TextSelectionSource`` backed by a rendered container's HTML.

    Args:
        html: Rendered HTML containing the container element.
        container_id: Value of the container's ``data-container-id``.
    """

    def __init__(self, html: str, container_id: str) -> None:
        self.container_id = container_id
        root = _find_root(LexborHTMLParser(html), container_id) if html else None
        if root is None:
            logger.warning("Container %s not found in rendered HTML", container_id)
            self._nodes: list[_TextNodeInfo] = []
        else:
            self._nodes = _walk_text_nodes(root)
        self._plain = "".join(n.text for n in self._nodes)
        self._anchor: DomPoint | None = None
        self._focus: DomPoint | None = None

    @property
    def plain_text(self) -> str:
        return self._plain

    def select(self, anchor: DomPoint, focus: DomPoint) -> None:
        """Set the selection; *focus* may precede *anchor* (backward drag)."""
        self._anchor = anchor
        self._focus = focus

    def select_offsets(self, start: int, end: int) -> None:
        """Select plain-text ``[start, end)`` the way a mouse drag would."""
        self.select(
            self.point_for_offset(start),
            self.point_for_offset(end, prefer_end=True),
        )

    def clear(self) -> None:
        self._anchor = None
        self._focus = None

    def point_for_offset(self, offset: int, *, prefer_end: bool = False) -> DomPoint:
        """Map a plain-text offset to a boundary point.

        An offset on the boundary between two text nodes resolves to the
        start of the later node, or to the end of the earlier one when
        *prefer_end* is set (the natural place for a selection end).
        """
        if not self._nodes:
            return DomPoint(0, 0)
        offset = max(0, min(offset, len(self._plain)))
        for i, node in enumerate(self._nodes):
            if node.char_start < offset < node.char_end:
                return DomPoint(i, offset - node.char_start)
            if offset == node.char_start and not (prefer_end and i > 0):
                return DomPoint(i, 0)
            if offset == node.char_end and (
                prefer_end or i == len(self._nodes) - 1
            ):
                return DomPoint(i, len(node.text))
        last = len(self._nodes) - 1
        return DomPoint(last, len(self._nodes[last].text))

    def _offset_of(self, point: DomPoint) -> int | None:
        if not 0 <= point.node_index < len(self._nodes):
            return None
        node = self._nodes[point.node_index]
        if not 0 <= point.offset <= len(node.text):
            return None
        return node.char_start + point.offset

    def current_selection(self) -> SelectionSnapshot | None:
        if self._anchor is None or self._focus is None:
            return None

        anchor_pos = self._offset_of(self._anchor)
        focus_pos = self._offset_of(self._focus)
        if anchor_pos is None or focus_pos is None:
            # Endpoint not in this container's text
            return None

        start, end = sorted((anchor_pos, focus_pos))
        return SelectionSnapshot(
            container_id=self.container_id,
            text=self._plain[start:end],
            start_offset=start,
            collapsed=start == end,
            anchor_in_mark=self._nodes[self._anchor.node_index].in_mark,
            focus_in_mark=self._nodes[self._focus.node_index].in_mark,
        )
