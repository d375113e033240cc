"""Data models for lessons, concepts and text annotations.

These are plain frozen dataclasses. Persistence is the host's job: every model
round-trips through ``to_dict()`` / ``from_dict()`` using the camelCase keys
the stored lesson blobs already use.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any


class FieldName(StrEnum):
    """Annotatable text fields of a concept.

    Each field has its own independent offset space.
    """

    DEFINITION = "definition"
    NOTES = "notes"
    CODE_EXAMPLE = "codeExample"


class RenderMode(StrEnum):
    """How a field's text is painted."""

    PROSE = "prose"
    CODE = "code"


def render_mode_for(field_name: FieldName) -> RenderMode:
    """Return the render mode used for *field_name*."""
    match field_name:
        case FieldName.DEFINITION | FieldName.NOTES:
            return RenderMode.PROSE
        case FieldName.CODE_EXAMPLE:
            return RenderMode.CODE


@dataclass(frozen=True)
class Annotation:
    """A user highlight plus note anchored to ``[start_index, end_index)``.

    Attributes:
        id: Opaque identifier, never reused.
        concept_id: Concept the annotation belongs to.
        field_name: Which text field of the concept it anchors into.
        target_text: Substring captured at creation time (a snapshot).
        start_index: Start offset into the field's plain text (inclusive).
        end_index: End offset (exclusive).
        note: Free-form user note.
    """

    id: str
    concept_id: str
    field_name: FieldName
    target_text: str
    start_index: int
    end_index: int
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "conceptId": self.concept_id,
            "fieldName": self.field_name.value,
            "targetText": self.target_text,
            "note": self.note,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Annotation:
        return cls(
            id=str(data["id"]),
            concept_id=str(data["conceptId"]),
            field_name=FieldName(data["fieldName"]),
            target_text=str(data.get("targetText", "")),
            start_index=int(data["startIndex"]),
            end_index=int(data["endIndex"]),
            note=str(data.get("note") or ""),
        )


@dataclass(frozen=True)
class Concept:
    """One teachable unit within a lesson."""

    id: str
    term: str
    definition: str = ""
    notes: str = ""
    visual_example: str = ""
    code_example: str = ""

    def get_field(self, field_name: FieldName) -> str:
        """Return the raw stored value of an annotatable field."""
        match field_name:
            case FieldName.DEFINITION:
                return self.definition
            case FieldName.NOTES:
                return self.notes
            case FieldName.CODE_EXAMPLE:
                return self.code_example

    def with_field(self, field_name: FieldName, value: str) -> Concept:
        """Return a copy with one annotatable field replaced."""
        match field_name:
            case FieldName.DEFINITION:
                return replace(self, definition=value)
            case FieldName.NOTES:
                return replace(self, notes=value)
            case FieldName.CODE_EXAMPLE:
                return replace(self, code_example=value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "term": self.term,
            "definition": self.definition,
            "notes": self.notes,
            "visualExample": self.visual_example,
            "codeExample": self.code_example,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Concept:
        return cls(
            id=str(data["id"]),
            term=str(data.get("term", "")),
            definition=str(data.get("definition") or ""),
            notes=str(data.get("notes") or ""),
            visual_example=str(data.get("visualExample") or ""),
            code_example=str(data.get("codeExample") or ""),
        )


@dataclass(frozen=True)
class Lesson:
    """A topic, its concepts, and the user's annotations over them.

    Mutation always goes through whole-object replacement so the host can
    persist the new value atomically.
    """

    id: str
    topic: str
    concepts: tuple[Concept, ...] = ()
    annotations: tuple[Annotation, ...] = ()

    def get_concept(self, concept_id: str) -> Concept | None:
        for concept in self.concepts:
            if concept.id == concept_id:
                return concept
        return None

    def with_annotations(self, annotations: list[Annotation]) -> Lesson:
        return replace(self, annotations=tuple(annotations))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "topic": self.topic,
            "concepts": [c.to_dict() for c in self.concepts],
            "annotations": [a.to_dict() for a in self.annotations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Lesson:
        # Lessons saved before annotations existed have no key at all
        return cls(
            id=str(data["id"]),
            topic=str(data.get("topic", "")),
            concepts=tuple(Concept.from_dict(c) for c in data.get("concepts") or []),
            annotations=tuple(
                Annotation.from_dict(a) for a in data.get("annotations") or []
            ),
        )


@dataclass(frozen=True)
class Folder:
    """A named group of lessons in the sidebar."""

    id: str
    name: str
    lessons: tuple[Lesson, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "lessons": [lesson.to_dict() for lesson in self.lessons],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Folder:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            lessons=tuple(
                Lesson.from_dict(lesson) for lesson in data.get("lessons") or []
            ),
        )
