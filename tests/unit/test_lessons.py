"""Tests for whole-lesson operations and Markdown export."""

from __future__ import annotations

from lessonmark.export.markdown import export_markdown, lesson_to_markdown
from lessonmark.lessons import (
    edit_concept_field,
    field_text,
    narration_text,
    rename_topic,
)
from lessonmark.models.lesson import FieldName, RenderMode
from lessonmark.render.spans import merge_spans


class TestFieldText:
    def test_code_field_is_unfenced(self, sample_lesson) -> None:
        concept = sample_lesson.concepts[0]
        assert field_text(concept, FieldName.CODE_EXAMPLE) == (
            "int fact(int n) { return n; }"
        )

    def test_prose_field_is_raw(self, sample_lesson) -> None:
        concept = sample_lesson.concepts[0]
        assert field_text(concept, FieldName.NOTES) == "Watch the base case."


class TestRenameTopic:
    def test_trims_and_applies(self, sample_lesson) -> None:
        assert rename_topic(sample_lesson, "  Tail calls ").topic == "Tail calls"

    def test_blank_or_unchanged_returns_same_lesson(self, sample_lesson) -> None:
        assert rename_topic(sample_lesson, "   ") is sample_lesson
        assert rename_topic(sample_lesson, " Recursion ") is sample_lesson


class TestEditConceptField:
    def test_replaces_field_and_keeps_annotations(
        self, sample_lesson, make_annotation
    ) -> None:
        lesson = sample_lesson.with_annotations([make_annotation(0, 30)])
        edited = edit_concept_field(lesson, "c1", FieldName.DEFINITION, "Short.")
        assert edited.concepts[0].definition == "Short."
        assert edited.annotations == lesson.annotations
        assert lesson.concepts[0].definition.startswith("Recursion")

    def test_stale_annotation_still_renders(
        self, sample_lesson, make_annotation
    ) -> None:
        lesson = sample_lesson.with_annotations([make_annotation(3, 30)])
        edited = edit_concept_field(lesson, "c1", FieldName.DEFINITION, "Short.")
        text = field_text(edited.concepts[0], FieldName.DEFINITION)
        spans = merge_spans(text, edited.annotations, RenderMode.PROSE)
        assert "".join(s.text for s in spans) == "Short."
        assert spans[-1].text == "rt."

    def test_unknown_concept(self, sample_lesson) -> None:
        assert (
            edit_concept_field(sample_lesson, "zz", FieldName.NOTES, "x")
            is sample_lesson
        )


class TestNarration:
    def test_script_contains_fields_and_unfenced_code(self, sample_lesson) -> None:
        script = narration_text(sample_lesson.concepts[0])
        assert script.startswith("Recursion\n\nDefinition: Recursion is")
        assert "Notes: Watch the base case." in script
        assert "Code example: int fact(int n) { return n; }" in script
        assert "```" not in script


class TestMarkdownExport:
    def test_document_structure(self, sample_lesson, make_annotation) -> None:
        lesson = sample_lesson.with_annotations(
            [
                make_annotation(15, 23, target_text="function", note="a callable"),
                make_annotation(
                    4,
                    8,
                    field_name=FieldName.CODE_EXAMPLE,
                    target_text="fact",
                ),
            ]
        )
        md = lesson_to_markdown(lesson)
        assert md.startswith("# Recursion\n")
        assert "## 1. Recursion" in md
        assert "### Notes & Edge Cases" in md
        assert "```java\nint fact(int n) { return n; }\n```" in md
        assert '- **Definition**: "function" - a callable' in md
        assert '- **Code Example**: "fact"' in md
        assert md.endswith("\n")

    def test_no_annotation_section_without_annotations(self, sample_lesson) -> None:
        assert "### Annotations" not in lesson_to_markdown(sample_lesson)

    def test_export_forces_md_suffix(self, sample_lesson, tmp_path) -> None:
        out = export_markdown(sample_lesson, tmp_path / "sub" / "lesson.txt")
        assert out == tmp_path / "sub" / "lesson.md"
        assert out.read_text(encoding="utf-8").startswith("# Recursion")
