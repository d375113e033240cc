"""Tests for the immutable annotation store operations."""

from __future__ import annotations

import logging

import pytest

from lessonmark.annotations.store import (
    DuplicateIdError,
    add,
    new_annotation,
    relevant_for,
    remove,
    update_note,
)
from lessonmark.models.lesson import FieldName


class TestNewAnnotation:
    def test_fresh_unique_ids(self) -> None:
        first = new_annotation("c1", FieldName.NOTES, 0, 4, "Watc", 20)
        second = new_annotation("c1", FieldName.NOTES, 0, 4, "Watc", 20)
        assert first.id != second.id
        assert first.note == ""

    @pytest.mark.parametrize(
        ("start", "end"),
        [(3, 3), (5, 2), (-1, 2), (0, 11)],
    )
    def test_rejects_invalid_range(self, start: int, end: int) -> None:
        with pytest.raises(ValueError, match="invalid annotation range"):
            new_annotation("c1", FieldName.NOTES, start, end, "", 10)

    def test_full_text_range_allowed(self) -> None:
        annotation = new_annotation("c1", FieldName.NOTES, 0, 10, "0123456789", 10)
        assert (annotation.start_index, annotation.end_index) == (0, 10)


class TestAdd:
    def test_appends_without_mutating_input(self, make_annotation) -> None:
        original = [make_annotation(0, 2)]
        snapshot = list(original)
        result = add(original, make_annotation(4, 6))
        assert [a.id for a in result] == ["a0", "a4"]
        assert original == snapshot

    def test_duplicate_id_rejected(self, make_annotation, caplog) -> None:
        original = [make_annotation(0, 2, id="dup")]
        with caplog.at_level(logging.ERROR):
            result = add(original, make_annotation(4, 6, id="dup"))
        assert result == original
        assert result is not original
        assert "dup" in caplog.text

    def test_duplicate_id_error_carries_id(self) -> None:
        err = DuplicateIdError("x1")
        assert err.annotation_id == "x1"
        assert isinstance(err, ValueError)


class TestUpdateNote:
    def test_replaces_note(self, make_annotation) -> None:
        original = [make_annotation(0, 2), make_annotation(4, 6)]
        result = update_note(original, "a4", "remember this")
        assert result[1].note == "remember this"
        assert result[0] is original[0]

    def test_input_unchanged(self, make_annotation) -> None:
        original = [make_annotation(0, 2, note="old")]
        snapshot = list(original)
        update_note(original, "a0", "new")
        assert original == snapshot
        assert original[0].note == "old"

    def test_unknown_id_is_noop(self, make_annotation) -> None:
        original = [make_annotation(0, 2)]
        assert update_note(original, "missing", "x") == original


class TestRemove:
    def test_filters_matching_entry(self, make_annotation) -> None:
        original = [make_annotation(0, 2), make_annotation(4, 6)]
        snapshot = list(original)
        assert [a.id for a in remove(original, "a0")] == ["a4"]
        assert original == snapshot

    def test_unknown_id(self, make_annotation) -> None:
        original = [make_annotation(0, 2)]
        assert remove(original, "missing") == original


class TestRelevantFor:
    def test_filters_by_concept_and_field_and_sorts(self, make_annotation) -> None:
        annotations = [
            make_annotation(9, 12),
            make_annotation(0, 3, field_name=FieldName.NOTES),
            make_annotation(1, 4, concept_id="other"),
            make_annotation(2, 5),
        ]
        result = relevant_for(annotations, "c1", FieldName.DEFINITION)
        assert [a.id for a in result] == ["a2", "a9"]

    def test_accepts_tuple(self, sample_lesson, make_annotation) -> None:
        lesson = sample_lesson.with_annotations([make_annotation(3, 5)])
        assert relevant_for(lesson.annotations, "c1", FieldName.DEFINITION) == [
            lesson.annotations[0]
        ]
