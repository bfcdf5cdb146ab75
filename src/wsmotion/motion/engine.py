"""Whitespace-boundary cursor motions.

Both motions share one code path parameterised by :class:`MotionDirection`.
The search is bounded to the current line; crossing into a neighbouring line
only happens when the cursor already sits on a line boundary.

Going forward the cursor lands *after* the first whitespace run between the
cursor and the end of the line. Going backward the cursor lands *before* the
last whitespace run between the start of the line and the cursor. The
backward search reverses the line prefix and scans it forwards instead of
anchoring a pattern at the end of the prefix; the anchored form produced
inconsistent results when run straight after a forward motion.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.positions import Position, PositionRange
from .host import DocumentHost, EditorHost

LOGGER = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")

DEFAULT_END_OF_DOCUMENT_NOTICE = "At EOF."
DEFAULT_START_OF_DOCUMENT_NOTICE = "At start of file."


class MotionDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class MotionReason(str, Enum):
    """Why a motion landed where it did."""

    END_OF_DOCUMENT = "end_of_document"
    START_OF_DOCUMENT = "start_of_document"
    NEXT_LINE = "next_line"
    PREVIOUS_LINE = "previous_line"
    WHITESPACE_RUN = "whitespace_run"
    LINE_END = "line_end"
    LINE_START = "line_start"


@dataclass(slots=True, frozen=True)
class MotionResult:
    """Outcome of a single motion request."""

    direction: MotionDirection
    origin: Position
    target: Position | None
    reason: MotionReason
    notice: str | None = None

    @property
    def moved(self) -> bool:
        return self.target is not None


@dataclass(slots=True, frozen=True)
class CursorMotionEngine:
    """Stateless calculator for whitespace-boundary cursor motions."""

    end_of_document_notice: str = DEFAULT_END_OF_DOCUMENT_NOTICE
    start_of_document_notice: str = DEFAULT_START_OF_DOCUMENT_NOTICE

    @classmethod
    def from_settings(cls, settings: Any) -> CursorMotionEngine:
        """Build an engine using the notice texts configured in ``settings``."""

        return cls(
            end_of_document_notice=getattr(settings, "end_of_document_notice", None)
            or DEFAULT_END_OF_DOCUMENT_NOTICE,
            start_of_document_notice=getattr(settings, "start_of_document_notice", None)
            or DEFAULT_START_OF_DOCUMENT_NOTICE,
        )

    # ------------------------------------------------------------------
    # Boundary predicates
    # ------------------------------------------------------------------
    @staticmethod
    def at_end_of_line(document: DocumentHost, position: Position) -> bool:
        return position.character == document.line_length(position.line)

    @classmethod
    def at_end_of_document(cls, document: DocumentHost, position: Position) -> bool:
        return cls.at_end_of_line(document, position) and position.line == document.line_count - 1

    @staticmethod
    def at_start_of_line(position: Position) -> bool:
        return position.character == 0

    @classmethod
    def at_start_of_document(cls, position: Position) -> bool:
        return cls.at_start_of_line(position) and position.line == 0

    # ------------------------------------------------------------------
    # Motions
    # ------------------------------------------------------------------
    def compute(
        self,
        document: DocumentHost,
        cursor: Position,
        direction: MotionDirection,
    ) -> MotionResult:
        """Return where ``cursor`` should move, without touching any host."""

        if direction is MotionDirection.FORWARD:
            result = self._next_boundary(document, cursor)
        elif direction is MotionDirection.BACKWARD:
            result = self._previous_boundary(document, cursor)
        else:  # pragma: no cover - enum is exhaustive
            raise ValueError(f"Unsupported motion direction: {direction!r}")
        LOGGER.debug(
            "Motion %s from %s -> %s (%s)",
            direction.value,
            cursor.to_tuple(),
            result.target.to_tuple() if result.target is not None else None,
            result.reason.value,
        )
        return result

    def next_boundary(self, document: DocumentHost, cursor: Position) -> MotionResult:
        return self.compute(document, cursor, MotionDirection.FORWARD)

    def previous_boundary(self, document: DocumentHost, cursor: Position) -> MotionResult:
        return self.compute(document, cursor, MotionDirection.BACKWARD)

    def apply(self, host: EditorHost, direction: MotionDirection) -> MotionResult:
        """Move the host's cursor, or show the boundary notice when it cannot move."""

        document = host.document()
        cursor = Position.from_value(host.cursor_position())
        result = self.compute(document, cursor, direction)
        if result.target is not None:
            host.set_cursor(result.target)
        elif result.notice:
            _notify(host, result.notice)
        return result

    def _next_boundary(self, document: DocumentHost, cursor: Position) -> MotionResult:
        forward = MotionDirection.FORWARD
        if self.at_end_of_document(document, cursor):
            return MotionResult(forward, cursor, None, MotionReason.END_OF_DOCUMENT, self.end_of_document_notice)
        line_length = document.line_length(cursor.line)
        if cursor.character == line_length:
            return MotionResult(forward, cursor, Position(cursor.line + 1, 0), MotionReason.NEXT_LINE)

        remainder = document.get_text(PositionRange(cursor, Position(cursor.line, line_length)))
        match = _WHITESPACE_RUN.search(remainder)
        if match is None:
            return MotionResult(forward, cursor, Position(cursor.line, line_length), MotionReason.LINE_END)
        target = document.position_at(document.offset_at(cursor) + match.end())
        return MotionResult(forward, cursor, target, MotionReason.WHITESPACE_RUN)

    def _previous_boundary(self, document: DocumentHost, cursor: Position) -> MotionResult:
        backward = MotionDirection.BACKWARD
        if self.at_start_of_document(cursor):
            return MotionResult(backward, cursor, None, MotionReason.START_OF_DOCUMENT, self.start_of_document_notice)
        if self.at_start_of_line(cursor):
            previous_line = cursor.line - 1
            target = Position(previous_line, document.line_length(previous_line))
            return MotionResult(backward, cursor, target, MotionReason.PREVIOUS_LINE)

        prefix = document.get_text(PositionRange(Position(cursor.line, 0), cursor))
        match = _WHITESPACE_RUN.search(prefix[::-1])
        if match is None:
            return MotionResult(backward, cursor, Position(cursor.line, 0), MotionReason.LINE_START)
        # match.end() on the reversed prefix is the distance back to the start of the run
        target = document.position_at(document.offset_at(cursor) - match.end())
        return MotionResult(backward, cursor, target, MotionReason.WHITESPACE_RUN)


def _notify(host: EditorHost, message: str) -> None:
    try:
        host.notify(message)
    except Exception:  # notices are best effort
        LOGGER.debug("Unable to display notice %r", message, exc_info=True)


__all__ = [
    "CursorMotionEngine",
    "MotionDirection",
    "MotionReason",
    "MotionResult",
    "DEFAULT_END_OF_DOCUMENT_NOTICE",
    "DEFAULT_START_OF_DOCUMENT_NOTICE",
]
