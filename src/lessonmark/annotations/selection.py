"""Capture a user's text selection as plain-text offsets.

The live selection API belongs to the host UI, so it is abstracted as a
``TextSelectionSource``.  A source reports which container the selection is
in, the selected text, where it starts in the container's plain text, and
whether either endpoint sits inside an already-rendered highlight mark.
``capture_offsets`` turns that into an ``Offsets`` pair or declines with
``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionSnapshot:
    """What a selection source reports about the current selection.

    Attributes:
        container_id: Rendering container that holds the selection.
        text: Selected text (markup ignored).
        start_offset: Plain-text characters in the container before the
            selection start.
        collapsed: True for a caret with nothing selected.
        anchor_in_mark: Anchor endpoint lies inside a highlight mark.
        focus_in_mark: Focus endpoint lies inside a highlight mark.
    """

    container_id: str
    text: str
    start_offset: int
    collapsed: bool = False
    anchor_in_mark: bool = False
    focus_in_mark: bool = False


@dataclass(frozen=True)
class Offsets:
    """Half-open ``[start_index, end_index)`` range plus the captured text."""

    start_index: int
    end_index: int
    text: str


class TextSelectionSource(Protocol):
    """Host-side access to the active text selection."""

    def current_selection(self) -> SelectionSnapshot | None:
        """Return the active selection, or None if there is none."""
        ...

    def clear(self) -> None:
        """Remove the active selection."""
        ...


def capture_offsets(container_id: str, source: TextSelectionSource) -> Offsets | None:
    """Compute the offsets of the active selection inside *container_id*.

    Returns None (and creates nothing) when the selection is missing,
    collapsed, blank, outside the container, or has an endpoint inside an
    existing highlight.  In the last case the selection is also cleared so
    the user does not see a half-made highlight-of-a-highlight.
    """
    snapshot = source.current_selection()
    if snapshot is None or snapshot.collapsed:
        return None

    if not snapshot.text.strip():
        return None

    if snapshot.container_id != container_id:
        logger.debug(
            "Selection in container %s ignored by %s",
            snapshot.container_id,
            container_id,
        )
        return None

    if snapshot.anchor_in_mark or snapshot.focus_in_mark:
        logger.debug("Selection endpoint inside existing highlight; clearing")
        source.clear()
        return None

    if snapshot.start_offset < 0:
        return None

    return Offsets(
        start_index=snapshot.start_offset,
        end_index=snapshot.start_offset + len(snapshot.text),
        text=snapshot.text,
    )
