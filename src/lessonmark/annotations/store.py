"""Immutable-update operations on a lesson's annotation list.

Every function returns a new list and leaves its input untouched, so the
owning lesson can be replaced atomically and diffed by the host.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING
from uuid import uuid4

from lessonmark.models.lesson import Annotation, FieldName

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class DuplicateIdError(ValueError):
    """Raised when an annotation id is already present in the list."""

    def __init__(self, annotation_id: str) -> None:
        super().__init__(f"annotation id already exists: {annotation_id}")
        self.annotation_id = annotation_id


def new_annotation(
    concept_id: str,
    field_name: FieldName,
    start_index: int,
    end_index: int,
    target_text: str,
    text_length: int,
    note: str = "",
) -> Annotation:
    """Create an annotation with a fresh id.

    Raises:
        ValueError: If ``0 <= start_index < end_index <= text_length`` does
            not hold.
    """
    if not 0 <= start_index < end_index <= text_length:
        msg = (
            f"invalid annotation range [{start_index}, {end_index}) "
            f"for text of length {text_length}"
        )
        raise ValueError(msg)
    return Annotation(
        id=uuid4().hex,
        concept_id=concept_id,
        field_name=field_name,
        target_text=target_text,
        start_index=start_index,
        end_index=end_index,
        note=note,
    )


def _check_unique(annotations: Sequence[Annotation], annotation: Annotation) -> None:
    if any(a.id == annotation.id for a in annotations):
        raise DuplicateIdError(annotation.id)


def add(annotations: Sequence[Annotation], annotation: Annotation) -> list[Annotation]:
    """Append *annotation*.

    An id collision is rejected: the error is logged and an unchanged copy
    of *annotations* is returned.
    """
    try:
        _check_unique(annotations, annotation)
    except DuplicateIdError as exc:
        logger.error("Rejected annotation add: %s", exc)
        return list(annotations)
    return [*annotations, annotation]


def update_note(
    annotations: Sequence[Annotation], annotation_id: str, note: str
) -> list[Annotation]:
    """Replace the note of the annotation with *annotation_id*.

    Unknown ids are a no-op.
    """
    return [replace(a, note=note) if a.id == annotation_id else a for a in annotations]


def remove(annotations: Sequence[Annotation], annotation_id: str) -> list[Annotation]:
    """Drop the annotation with *annotation_id*, if present."""
    return [a for a in annotations if a.id != annotation_id]


def relevant_for(
    annotations: Sequence[Annotation], concept_id: str, field_name: FieldName
) -> list[Annotation]:
    """Annotations anchored in one concept field, ascending by start offset."""
    return sorted(
        (
            a
            for a in annotations
            if a.concept_id == concept_id and a.field_name == field_name
        ),
        key=lambda a: a.start_index,
    )
