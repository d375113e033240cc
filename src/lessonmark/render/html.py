"""Paint merged spans as HTML for the host page.

Highlighted spans become ``<mark>`` elements carrying the annotation id for
click handling; code-mode spans are wrapped in ``<span class="tok-...">``.
Consecutive spans of one annotation share a single mark, so a highlight in
code reads as one element with coloured tokens inside it.

The markup is the only thing that changes between renders: the plain text
of the output (``extract_plain_text``) always equals the field text, which
keeps selection offsets stable.
"""

from __future__ import annotations

import html
from itertools import groupby
from typing import TYPE_CHECKING

from lessonmark.config import RenderConfig
from lessonmark.models.lesson import RenderMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lessonmark.models.lesson import FieldName
    from lessonmark.render.spans import Span


def container_id_for(concept_id: str, field_name: FieldName) -> str:
    """Stable DOM container id for one concept field."""
    return f"{concept_id}:{field_name.value}"


def _escape_text(text: str) -> str:
    # HTML parsing normalises CR/CRLF to LF; a character reference survives.
    return html.escape(text, quote=False).replace("\r", "&#13;")


def _paint_span(span: Span, config: RenderConfig) -> str:
    body = _escape_text(span.text)
    if span.token_kind is None:
        return body
    css_class = f"{config.token_class_prefix}{span.token_kind.value}"
    return f'<span class="{css_class}">{body}</span>'


def render_spans_html(
    spans: Sequence[Span],
    config: RenderConfig | None = None,
) -> str:
    """Render spans to inline HTML (no container element)."""
    config = config or RenderConfig()
    parts: list[str] = []
    for annotation, group in groupby(spans, key=lambda s: s.annotation):
        inner = "".join(_paint_span(span, config) for span in group)
        if annotation is None:
            parts.append(inner)
        else:
            annotation_id = html.escape(annotation.id)
            parts.append(
                f'<mark class="{config.mark_class}" '
                f'data-annotation-id="{annotation_id}">{inner}</mark>'
            )
    return "".join(parts)


def render_field_html(
    spans: Sequence[Span],
    container_id: str,
    mode: RenderMode,
    config: RenderConfig | None = None,
    language: str | None = None,
) -> str:
    """Render one field's spans inside its selection container.

    Args:
        spans: Output of ``merge_spans`` for the field.
        container_id: Value for the ``data-container-id`` attribute.
        mode: Prose fields render in a ``<div>``; code in ``<pre><code>``.
        config: CSS class configuration; defaults to ``RenderConfig()``.
        language: Optional language tag for code blocks.
    """
    inner = render_spans_html(spans, config)
    cid = html.escape(container_id)
    match mode:
        case RenderMode.PROSE:
            return f'<div class="field-prose" data-container-id="{cid}">{inner}</div>'
        case RenderMode.CODE:
            lang = f' data-language="{html.escape(language)}"' if language else ""
            return (
                f'<pre class="field-code" data-container-id="{cid}"{lang}>'
                f"<code>{inner}</code></pre>"
            )
