"""Tests for the editor document dataclasses."""

from __future__ import annotations

from pathlib import Path

import pytest

from wsmotion.editor.document_model import DocumentMetadata, DocumentState, SelectionRange


def test_update_text_marks_dirty_and_bumps_revision() -> None:
    state = DocumentState(text="before")
    created = state.metadata.updated_at

    state.update_text("after")

    assert state.text == "after"
    assert state.dirty is True
    assert state.revision == 1
    assert state.metadata.updated_at >= created


def test_display_name_uses_file_name() -> None:
    assert DocumentMetadata().display_name == "untitled"
    assert DocumentMetadata(path=Path("/tmp/notes.txt")).display_name == "notes.txt"


def test_selection_from_value_shapes() -> None:
    class _Span:
        start = 2
        end = 5

    assert SelectionRange.from_value((1, 4)) == SelectionRange(1, 4)
    assert SelectionRange.from_value({"start": 3, "end": 3}).is_caret is True
    assert SelectionRange.from_value(_Span()).as_tuple() == (2, 5)

    with pytest.raises(ValueError):
        SelectionRange.from_value((1, 2, 3))
    with pytest.raises(TypeError):
        SelectionRange.from_value({"start": 1})
