"""Tests for painting spans as HTML."""

from __future__ import annotations

from lessonmark.annotations.dom_selection import extract_plain_text
from lessonmark.config import RenderConfig
from lessonmark.models.lesson import FieldName, RenderMode
from lessonmark.render.html import (
    container_id_for,
    render_field_html,
    render_spans_html,
)
from lessonmark.render.spans import merge_spans


class TestProse:
    def test_highlight_becomes_mark(self, make_annotation) -> None:
        annotation = make_annotation(6, 11, id="a1")
        spans = merge_spans("hello world", [annotation], RenderMode.PROSE)
        html = render_field_html(spans, "c", RenderMode.PROSE)
        assert html == (
            '<div class="field-prose" data-container-id="c">hello '
            '<mark class="annotation-highlight" data-annotation-id="a1">world</mark>'
            "</div>"
        )

    def test_text_is_escaped(self) -> None:
        text = "a<b & \"c\" > d"
        html = render_spans_html(merge_spans(text, [], RenderMode.PROSE))
        assert html == "a&lt;b &amp; \"c\" &gt; d"
        assert extract_plain_text(html) == text


class TestCode:
    def test_tokens_wrapped_and_grouped_in_one_mark(self, make_annotation) -> None:
        spans = merge_spans("int x = 5;", [make_annotation(0, 5)], RenderMode.CODE)
        html = render_field_html(spans, "c", RenderMode.CODE, language="java")
        assert html.startswith(
            '<pre class="field-code" data-container-id="c" data-language="java">'
            "<code><mark "
        )
        assert html.count("<mark") == 1
        assert (
            '<mark class="annotation-highlight" data-annotation-id="a0">'
            '<span class="tok-keyword">int</span>'
            '<span class="tok-plain"> </span>'
            '<span class="tok-plain">x</span></mark>'
        ) in html
        assert '<span class="tok-number">5</span>' in html
        assert extract_plain_text(html, "c") == "int x = 5;"

    def test_custom_css_classes(self, make_annotation) -> None:
        config = RenderConfig(mark_class="hl", token_class_prefix="syn-")
        spans = merge_spans("return", [make_annotation(0, 6)], RenderMode.CODE)
        html = render_spans_html(spans, config)
        assert html == (
            '<mark class="hl" data-annotation-id="a0">'
            '<span class="syn-keyword">return</span></mark>'
        )

    def test_adjacent_highlights_get_separate_marks(self, make_annotation) -> None:
        annotations = [make_annotation(0, 2), make_annotation(2, 4)]
        spans = merge_spans("abcd", annotations, RenderMode.CODE)
        assert render_spans_html(spans).count("<mark") == 2


def test_container_id_for() -> None:
    assert container_id_for("c1", FieldName.CODE_EXAMPLE) == "c1:codeExample"
