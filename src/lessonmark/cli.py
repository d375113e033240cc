"""Command-line utilities for inspecting stored lessons.

``lessonmark-render`` prints the annotated HTML of one concept field.
``lessonmark-export`` writes a lesson as a Markdown study sheet.
Both read a lesson JSON blob as the host application stores it.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console

from lessonmark import _setup_logging
from lessonmark.config import get_settings
from lessonmark.export.markdown import export_markdown
from lessonmark.models.lesson import FieldName, Lesson
from lessonmark.render.popover import LessonAnnotator

console = Console()


def _load_lesson(path: Path) -> Lesson:
    """Read a lesson JSON file, exiting with a message on failure."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]Error:[/] lesson file not found: {path}")
        sys.exit(1)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Error:[/] {path} is not valid JSON: {exc}")
        sys.exit(1)

    try:
        return Lesson.from_dict(data)
    except (KeyError, ValueError, TypeError, AttributeError) as exc:
        console.print(f"[red]Error:[/] {path} is not a lesson: {exc!r}")
        sys.exit(1)


def render_field(argv: list[str] | None = None) -> None:
    """Print the rendered HTML of one concept field."""
    parser = argparse.ArgumentParser(
        description="Render one annotated concept field as HTML.",
    )
    parser.add_argument("lesson", type=Path, help="Lesson JSON file.")
    parser.add_argument("concept_id", help="Concept id within the lesson.")
    parser.add_argument(
        "field",
        choices=[f.value for f in FieldName],
        help="Concept field to render.",
    )
    args = parser.parse_args(argv)

    _setup_logging()
    lesson = _load_lesson(args.lesson)
    if lesson.get_concept(args.concept_id) is None:
        console.print(f"[red]Error:[/] no concept {args.concept_id!r} in lesson")
        sys.exit(1)

    annotator = LessonAnnotator(
        lesson, on_update_lesson=lambda _: None, config=get_settings().render
    )
    html = annotator.render(args.concept_id, FieldName(args.field))
    # Raw output: no rich markup interpretation of the HTML
    console.print(html, markup=False, highlight=False, emoji=False, soft_wrap=True)


def export_lesson(argv: list[str] | None = None) -> None:
    """Write a lesson as Markdown."""
    parser = argparse.ArgumentParser(
        description="Export a lesson and its annotations as Markdown.",
    )
    parser.add_argument("lesson", type=Path, help="Lesson JSON file.")
    parser.add_argument("out", type=Path, help="Output path (.md is enforced).")
    args = parser.parse_args(argv)

    _setup_logging()
    lesson = _load_lesson(args.lesson)
    out = export_markdown(lesson, args.out)
    console.print(f"[green]Exported[/] {lesson.topic!r} to {out}")
