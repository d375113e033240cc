"""Annotation capture and the immutable annotation store."""

from lessonmark.annotations.dom_selection import (
    DomPoint,
    HtmlSelectionSource,
    extract_plain_text,
)
from lessonmark.annotations.selection import (
    Offsets,
    SelectionSnapshot,
    TextSelectionSource,
    capture_offsets,
)
from lessonmark.annotations.store import (
    DuplicateIdError,
    add,
    new_annotation,
    relevant_for,
    remove,
    update_note,
)

__all__ = [
    "DomPoint",
    "DuplicateIdError",
    "HtmlSelectionSource",
    "Offsets",
    "SelectionSnapshot",
    "TextSelectionSource",
    "add",
    "capture_offsets",
    "extract_plain_text",
    "new_annotation",
    "relevant_for",
    "remove",
    "update_note",
]
