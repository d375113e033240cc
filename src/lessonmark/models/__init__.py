"""Data models for lessons and annotations."""

from lessonmark.models.lesson import (
    Annotation,
    Concept,
    FieldName,
    Folder,
    Lesson,
    RenderMode,
    render_mode_for,
)

__all__ = [
    "Annotation",
    "Concept",
    "FieldName",
    "Folder",
    "Lesson",
    "RenderMode",
    "render_mode_for",
]
