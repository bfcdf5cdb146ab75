"""Shared test helpers and stub classes.

Import from here instead of duplicating these classes in individual test files.
"""

from __future__ import annotations

from typing import Any

from wsmotion.core.positions import Position
from wsmotion.documents.text_document import TextDocument


class RecordingHost:
    """In-memory editor host that records every cursor move and notice.

    Example:
        host = RecordingHost(TextDocument("foo bar"), (0, 0))
        move_to_next_whitespace_boundary(host)
        assert host.cursor == Position(0, 4)
    """

    def __init__(self, document: TextDocument, cursor: Any = (0, 0)) -> None:
        self._document = document
        self.cursor = Position.from_value(cursor)
        self.moves: list[Position] = []
        self.notices: list[str] = []

    def document(self) -> TextDocument:
        return self._document

    def cursor_position(self) -> Position:
        return self.cursor

    def set_cursor(self, position: Position) -> None:
        self.cursor = position
        self.moves.append(position)

    def notify(self, message: str) -> None:
        self.notices.append(message)


class FailingNoticeHost(RecordingHost):
    """Host whose notification surface is unavailable."""

    def notify(self, message: str) -> None:
        raise RuntimeError("status bar unavailable")
