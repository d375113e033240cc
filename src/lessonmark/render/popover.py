"""Lesson-view annotation controller and its note popover state machine.

One ``LessonAnnotator`` backs one lesson view and owns its single popover:

    Closed --(selection committed)--> Open(new, annotation)
    Closed --(highlight clicked)----> Open(edit, annotation)
    Open(*) --(close | save | delete | outside click)--> Closed

Opening a popover replaces whichever one was open.  Every annotation change
is applied through the immutable store functions and pushed to the host as a
whole new ``Lesson`` via ``on_update_lesson``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from lessonmark.annotations import store
from lessonmark.annotations.selection import capture_offsets
from lessonmark.highlight.code_block import parse_code_block
from lessonmark.lessons import field_text
from lessonmark.models.lesson import FieldName, RenderMode, render_mode_for
from lessonmark.render.html import container_id_for, render_field_html
from lessonmark.render.spans import merge_spans

if TYPE_CHECKING:
    from collections.abc import Callable

    from lessonmark.annotations.selection import TextSelectionSource
    from lessonmark.config import RenderConfig
    from lessonmark.models.lesson import Annotation, Lesson
    from lessonmark.render.spans import Span

logger = logging.getLogger(__name__)


class PopoverMode(StrEnum):
    NEW = "new"
    EDIT = "edit"


@dataclass(frozen=True)
class PopoverState:
    """An open popover: its mode, the annotation, and the host anchor element."""

    mode: PopoverMode
    annotation: Annotation
    anchor: Any = None


class LessonAnnotator:
    """Wire selections and highlight clicks of one lesson view to its lesson.

    Args:
        lesson: The lesson being displayed.
        on_update_lesson: Called with the replacement lesson after every
            annotation change.
        config: Render CSS configuration.
    """

    def __init__(
        self,
        lesson: Lesson,
        on_update_lesson: Callable[[Lesson], None],
        config: RenderConfig | None = None,
    ) -> None:
        self._lesson = lesson
        self._on_update_lesson = on_update_lesson
        self._config = config
        self._popover: PopoverState | None = None

    @property
    def lesson(self) -> Lesson:
        return self._lesson

    @property
    def popover(self) -> PopoverState | None:
        return self._popover

    def set_lesson(self, lesson: Lesson) -> None:
        """Adopt a lesson replaced by the host (e.g. after a title edit)."""
        self._lesson = lesson
        if self._popover is not None and not any(
            a.id == self._popover.annotation.id for a in lesson.annotations
        ):
            self._popover = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def spans(self, concept_id: str, field_name: FieldName) -> list[Span]:
        """Merged spans for one concept field of the current lesson."""
        concept = self._lesson.get_concept(concept_id)
        if concept is None:
            return []
        relevant = store.relevant_for(self._lesson.annotations, concept_id, field_name)
        return merge_spans(
            field_text(concept, field_name), relevant, render_mode_for(field_name)
        )

    def render(self, concept_id: str, field_name: FieldName) -> str:
        """HTML for one concept field, inside its selection container."""
        mode = render_mode_for(field_name)
        language = None
        if mode is RenderMode.CODE:
            concept = self._lesson.get_concept(concept_id)
            if concept is not None:
                language = parse_code_block(concept.code_example).language
        return render_field_html(
            self.spans(concept_id, field_name),
            container_id_for(concept_id, field_name),
            mode,
            self._config,
            language=language,
        )

    # ------------------------------------------------------------------
    # Host callbacks
    # ------------------------------------------------------------------

    def handle_selection(
        self,
        concept_id: str,
        field_name: FieldName,
        source: TextSelectionSource,
        anchor: Any = None,
    ) -> Annotation | None:
        """Mouse-up inside a field: close an open popover or capture a new one."""
        if self._popover is not None:
            self.close()
            return None

        offsets = capture_offsets(container_id_for(concept_id, field_name), source)
        if offsets is None:
            return None
        source.clear()
        return self.on_selection_committed(
            concept_id,
            field_name,
            offsets.start_index,
            offsets.end_index,
            offsets.text,
            anchor,
        )

    def on_selection_committed(
        self,
        concept_id: str,
        field_name: FieldName,
        start_index: int,
        end_index: int,
        text: str,
        anchor: Any = None,
    ) -> Annotation | None:
        """Create an annotation for a captured selection and open it as new."""
        if self._popover is not None:
            self.close()
            return None

        concept = self._lesson.get_concept(concept_id)
        if concept is None:
            logger.debug("Selection for unknown concept %s ignored", concept_id)
            return None

        length = len(field_text(concept, field_name))
        if not 0 <= start_index < end_index <= length:
            logger.debug(
                "Selection [%d, %d) outside %s/%s (length %d) ignored",
                start_index,
                end_index,
                concept_id,
                field_name.value,
                length,
            )
            return None

        annotation = store.new_annotation(
            concept_id, field_name, start_index, end_index, text, length
        )
        self._commit(store.add(self._lesson.annotations, annotation))
        self._popover = PopoverState(PopoverMode.NEW, annotation, anchor)
        return annotation

    def on_highlight_click(self, annotation: Annotation, anchor: Any = None) -> None:
        """Open the edit popover for a clicked highlight."""
        self._popover = PopoverState(PopoverMode.EDIT, annotation, anchor)

    def on_highlight_click_id(self, annotation_id: str, anchor: Any = None) -> None:
        """Like ``on_highlight_click`` but from a mark's ``data-annotation-id``."""
        for annotation in self._lesson.annotations:
            if annotation.id == annotation_id:
                self.on_highlight_click(annotation, anchor)
                return
        logger.debug("Click on unknown annotation %s ignored", annotation_id)

    # ------------------------------------------------------------------
    # Popover actions
    # ------------------------------------------------------------------

    def save(self, note: str) -> None:
        if self._popover is None:
            return
        annotation_id = self._popover.annotation.id
        self._commit(store.update_note(self._lesson.annotations, annotation_id, note))
        self._popover = None

    def delete(self) -> None:
        if self._popover is None:
            return
        annotation_id = self._popover.annotation.id
        self._commit(store.remove(self._lesson.annotations, annotation_id))
        self._popover = None

    def close(self) -> None:
        self._popover = None

    def outside_click(self, *, inside_popover: bool) -> None:
        """A click anywhere in the lesson view; closes unless on the popover."""
        if not inside_popover:
            self.close()

    def _commit(self, annotations: list[Annotation]) -> None:
        self._lesson = self._lesson.with_annotations(annotations)
        self._on_update_lesson(self._lesson)
