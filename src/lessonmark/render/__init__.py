"""Span merging, HTML painting and the lesson-view popover controller."""

from lessonmark.render.html import (
    container_id_for,
    render_field_html,
    render_spans_html,
)
from lessonmark.render.popover import LessonAnnotator, PopoverMode, PopoverState
from lessonmark.render.spans import Span, SpanKind, merge_spans

__all__ = [
    "LessonAnnotator",
    "PopoverMode",
    "PopoverState",
    "Span",
    "SpanKind",
    "container_id_for",
    "merge_spans",
    "render_field_html",
    "render_spans_html",
]
