"""Markdown study-sheet export of a lesson and its annotations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from lessonmark.annotations.store import relevant_for
from lessonmark.highlight.code_block import parse_code_block
from lessonmark.models.lesson import FieldName

if TYPE_CHECKING:
    from lessonmark.models.lesson import Concept, Lesson

logger = logging.getLogger(__name__)

_FIELD_LABELS = {
    FieldName.DEFINITION: "Definition",
    FieldName.NOTES: "Notes & Edge Cases",
    FieldName.CODE_EXAMPLE: "Code Example",
}


def _quote(text: str) -> str:
    return " ".join(text.split())


def _concept_markdown(index: int, concept: Concept, lesson: Lesson) -> list[str]:
    lines = [f"## {index}. {concept.term}", ""]

    if concept.definition:
        label = _FIELD_LABELS[FieldName.DEFINITION]
        lines += [f"### {label}", "", concept.definition, ""]
    if concept.notes:
        lines += [f"### {_FIELD_LABELS[FieldName.NOTES]}", "", concept.notes, ""]
    if concept.code_example:
        block = parse_code_block(concept.code_example)
        lang = "" if block.language == "plaintext" else block.language
        lines += [
            f"### {_FIELD_LABELS[FieldName.CODE_EXAMPLE]}",
            "",
            f"```{lang}",
            block.code,
            "```",
            "",
        ]

    notes: list[str] = []
    for field_name in FieldName:
        for annotation in relevant_for(lesson.annotations, concept.id, field_name):
            label = _FIELD_LABELS[field_name]
            entry = f'- **{label}**: "{_quote(annotation.target_text)}"'
            if annotation.note.strip():
                entry += f" - {_quote(annotation.note)}"
            notes.append(entry)
    if notes:
        lines += ["### Annotations", "", *notes, ""]

    return lines


def lesson_to_markdown(lesson: Lesson) -> str:
    """Render *lesson* as a Markdown document."""
    lines = [f"# {lesson.topic}", ""]
    for index, concept in enumerate(lesson.concepts, start=1):
        lines += _concept_markdown(index, concept, lesson)
    return "\n".join(lines).rstrip() + "\n"


def export_markdown(lesson: Lesson, out_path: str | Path) -> Path:
    """Write *lesson* as Markdown, forcing an ``.md`` suffix."""
    out = Path(out_path)
    if out.suffix.lower() != ".md":
        out = out.with_suffix(".md")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(lesson_to_markdown(lesson), encoding="utf-8")
    logger.info("Exported lesson %s to %s", lesson.id, out)
    return out
