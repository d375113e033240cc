"""Lesson export formats."""

from lessonmark.export.markdown import export_markdown, lesson_to_markdown

__all__ = ["export_markdown", "lesson_to_markdown"]
