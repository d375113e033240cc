"""Shared fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

import pytest

from lessonmark.models.lesson import Annotation, Concept, FieldName, Lesson

AnnotationFactory: TypeAlias = Callable[..., Annotation]

SAMPLE_CONCEPT_ID = "c1"
SAMPLE_DEFINITION = "Recursion is a function calling itself."
SAMPLE_CODE = "```java\nint fact(int n) { return n; }\n```"


@pytest.fixture
def make_annotation() -> AnnotationFactory:
    """Build annotations with sensible defaults; ids default to ``a<start>``."""

    def _make(
        start: int,
        end: int,
        *,
        id: str | None = None,  # noqa: A002 - mirrors the model field
        concept_id: str = SAMPLE_CONCEPT_ID,
        field_name: FieldName = FieldName.DEFINITION,
        target_text: str = "",
        note: str = "",
    ) -> Annotation:
        return Annotation(
            id=id or f"a{start}",
            concept_id=concept_id,
            field_name=field_name,
            target_text=target_text,
            start_index=start,
            end_index=end,
            note=note,
        )

    return _make


@pytest.fixture
def sample_lesson() -> Lesson:
    """A one-concept lesson with prose and a fenced Java example."""
    return Lesson(
        id="lesson-1",
        topic="Recursion",
        concepts=(
            Concept(
                id=SAMPLE_CONCEPT_ID,
                term="Recursion",
                definition=SAMPLE_DEFINITION,
                notes="Watch the base case.",
                visual_example="A set of nested dolls",
                code_example=SAMPLE_CODE,
            ),
        ),
    )
