"""Whole-lesson operations: field text resolution, edits, narration script."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from lessonmark.highlight.code_block import parse_code_block, strip_code_fence
from lessonmark.models.lesson import FieldName

if TYPE_CHECKING:
    from lessonmark.models.lesson import Concept, Lesson

logger = logging.getLogger(__name__)


def field_text(concept: Concept, field_name: FieldName) -> str:
    """Return the text annotation offsets for *field_name* index into.

    For code examples this is the unfenced code the user sees.
    """
    raw = concept.get_field(field_name)
    match field_name:
        case FieldName.CODE_EXAMPLE:
            return parse_code_block(raw).code
        case FieldName.DEFINITION | FieldName.NOTES:
            return raw


def rename_topic(lesson: Lesson, title: str) -> Lesson:
    """Apply a trimmed, non-empty, changed topic; otherwise return *lesson*."""
    trimmed = title.strip()
    if not trimmed or trimmed == lesson.topic:
        return lesson
    return replace(lesson, topic=trimmed)


def edit_concept_field(
    lesson: Lesson, concept_id: str, field_name: FieldName, value: str
) -> Lesson:
    """Replace one concept field.

    Annotations are kept as-is; offsets that no longer fit the new text are
    clamped at render time.
    """
    if lesson.get_concept(concept_id) is None:
        logger.warning("Edit for unknown concept %s ignored", concept_id)
        return lesson
    concepts = tuple(
        c.with_field(field_name, value) if c.id == concept_id else c
        for c in lesson.concepts
    )
    if any(
        a.concept_id == concept_id and a.field_name == field_name
        for a in lesson.annotations
    ):
        logger.info(
            "Concept %s field %s edited with annotations present; offsets may drift",
            concept_id,
            field_name.value,
        )
    return replace(lesson, concepts=concepts)


def narration_text(concept: Concept) -> str:
    """Build the text-to-speech script for one concept card."""
    parts = [concept.term]
    if concept.definition:
        parts.append(f"Definition: {concept.definition}")
    if concept.notes:
        parts.append(f"Notes: {concept.notes}")
    if concept.code_example:
        parts.append(f"Code example: {strip_code_fence(concept.code_example)}")
    return "\n\n".join(parts)
