"""Merge annotation ranges and syntax tokens into paintable spans.

Architecture:
    A cursor walks the field text once.  For each annotation (ascending by
    start offset) the gap before it is emitted as plain text, then the
    annotation's range is emitted as highlighted text, and the cursor jumps
    to the annotation's end.  In code mode every emitted range is further
    cut along the token boundaries of a single whole-text tokenization, so
    syntax colouring inside and around a highlight is identical to the
    unhighlighted rendering.

Overlap is not an error: an annotation starting before the cursor only
renders the part past the cursor.  Offsets beyond the text (stale after an
edit) are clamped.
"""

# Pattern: Functional Core (pure functions, no I/O)

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from lessonmark.highlight.tokenizer import TokenKind, tokenize, tokens_in_range
from lessonmark.models.lesson import RenderMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lessonmark.highlight.tokenizer import Token
    from lessonmark.models.lesson import Annotation

logger = logging.getLogger(__name__)


class SpanKind(StrEnum):
    PLAIN = "plain"
    HIGHLIGHTED = "highlighted"
    TOKEN = "token"
    HIGHLIGHTED_TOKEN = "highlighted-token"


@dataclass(frozen=True, slots=True)
class Span:
    """A renderable ``[start, end)`` slice of a field's text.

    Attributes:
        start: Start offset (inclusive).
        end: End offset (exclusive).
        text: ``field_text[start:end]``.
        kind: Highlight state and whether the span is token-coloured.
        annotation: Owning annotation for highlighted spans, else None.
        token_kind: Token classification in code mode, else None.
    """

    start: int
    end: int
    text: str
    kind: SpanKind
    annotation: Annotation | None = None
    token_kind: TokenKind | None = None

    @property
    def highlighted(self) -> bool:
        return self.annotation is not None


def _emit_range(
    spans: list[Span],
    text: str,
    start: int,
    end: int,
    annotation: Annotation | None,
    tokens: list[Token] | None,
) -> None:
    """Append spans for ``[start, end)``; no-op for an empty range."""
    if start >= end:
        return

    if tokens is None:
        kind = SpanKind.PLAIN if annotation is None else SpanKind.HIGHLIGHTED
        spans.append(Span(start, end, text[start:end], kind, annotation))
        return

    kind = SpanKind.TOKEN if annotation is None else SpanKind.HIGHLIGHTED_TOKEN
    for tok in tokens_in_range(tokens, start, end):
        spans.append(Span(tok.start, tok.end, tok.text, kind, annotation, tok.kind))


def merge_spans(
    text: str,
    annotations: Sequence[Annotation],
    mode: RenderMode,
) -> list[Span]:
    """Produce a gap-free, non-overlapping span sequence for one field.

    Args:
        text: The field's plain text.
        annotations: Annotations for this field (as from ``relevant_for``).
        mode: ``RenderMode.CODE`` tokenizes, ``RenderMode.PROSE`` does not.

    Returns:
        Spans covering exactly ``[0, len(text))`` in order.  Empty text
        gives an empty list.
    """
    if not text:
        return []

    length = len(text)
    tokens = tokenize(text) if mode is RenderMode.CODE else None
    spans: list[Span] = []
    last_index = 0

    for annotation in sorted(annotations, key=lambda a: a.start_index):
        if annotation.end_index > length:
            logger.warning(
                "Annotation %s range [%d, %d) exceeds text length %d; clamping",
                annotation.id,
                annotation.start_index,
                annotation.end_index,
                length,
            )

        start = max(annotation.start_index, last_index, 0)
        end = min(annotation.end_index, length)
        if start >= end:
            # Fully absorbed by an earlier highlight, or beyond the text
            continue

        _emit_range(spans, text, last_index, start, None, tokens)
        _emit_range(spans, text, start, end, annotation, tokens)
        last_index = end

    _emit_range(spans, text, last_index, length, None, tokens)
    return spans
