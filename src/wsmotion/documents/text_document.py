"""Immutable line-indexed view over a document's text."""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, Sequence

from ..core.positions import Position, PositionRange

_LF = "\n"
_CRLF = "\r\n"
SUPPORTED_EOLS: tuple[str, ...] = (_LF, _CRLF)


def detect_eol(text: str) -> str:
    """Return the end-of-line sequence used by ``text`` (``"\\n"`` by default)."""

    return _CRLF if _CRLF in text else _LF


class TextDocument:
    """Snapshot of a document exposing line lengths and offset conversion.

    Offsets count every character from the start of the document, including
    the end-of-line sequence between lines, so ``"\\r\\n"`` documents count two
    characters per break. Mixed line endings are normalised to the detected
    sequence on construction.
    """

    __slots__ = ("_lines", "_eol", "_text", "_line_starts")

    def __init__(self, text: str = "", *, eol: str | None = None) -> None:
        resolved_eol = eol if eol is not None else detect_eol(text)
        if resolved_eol not in SUPPORTED_EOLS:
            raise ValueError(f"Unsupported end-of-line sequence: {resolved_eol!r}")
        self._eol = resolved_eol
        self._lines: tuple[str, ...] = tuple(text.replace(_CRLF, _LF).split(_LF))
        self._text = resolved_eol.join(self._lines)
        self._line_starts = self._compute_line_starts(self._lines, len(resolved_eol))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, eol: str = _LF) -> TextDocument:
        """Build a document from already-split lines."""

        materialized = list(lines)
        if not materialized:
            materialized = [""]
        return cls(eol.join(materialized), eol=eol)

    @staticmethod
    def _compute_line_starts(lines: Sequence[str], eol_width: int) -> tuple[int, ...]:
        starts: list[int] = []
        cursor = 0
        for line in lines:
            starts.append(cursor)
            cursor += len(line) + eol_width
        return tuple(starts)

    # ------------------------------------------------------------------
    # Line accessors
    # ------------------------------------------------------------------
    @property
    def text(self) -> str:
        return self._text

    @property
    def eol(self) -> str:
        return self._eol

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def line_count(self) -> int:
        """Return the number of lines; an empty document has one empty line."""

        return len(self._lines)

    def __len__(self) -> int:
        return len(self._text)

    def line_at(self, line: int) -> str:
        """Return the text of ``line`` without its line break."""

        self._check_line(line)
        return self._lines[line]

    def line_length(self, line: int) -> int:
        return len(self.line_at(line))

    def line_range(self, line: int) -> PositionRange:
        """Return the span from the start to the end of ``line``."""

        length = self.line_length(line)
        return PositionRange(Position(line, 0), Position(line, length))

    # ------------------------------------------------------------------
    # Offset conversion
    # ------------------------------------------------------------------
    def offset_at(self, position: Position) -> int:
        """Return the linear offset of ``position``."""

        self.validate_position(position)
        return self._line_starts[position.line] + position.character

    def position_at(self, offset: int) -> Position:
        """Return the position for ``offset``, clamped to the document bounds.

        Offsets that fall between the two characters of a ``"\\r\\n"`` break
        resolve to the end of the preceding line.
        """

        cursor = max(0, min(int(offset), len(self._text)))
        line = max(0, bisect_right(self._line_starts, cursor) - 1)
        character = min(cursor - self._line_starts[line], len(self._lines[line]))
        return Position(line, character)

    def get_text(self, text_range: PositionRange | None = None) -> str:
        """Return the document text, or the substring covered by ``text_range``."""

        if text_range is None:
            return self._text
        start = self.offset_at(text_range.start)
        end = self.offset_at(text_range.end)
        return self._text[start:end]

    def validate_position(self, position: Position) -> None:
        """Raise :class:`IndexError` when ``position`` lies outside the document."""

        self._check_line(position.line)
        length = len(self._lines[position.line])
        if position.character > length:
            raise IndexError(
                f"Character {position.character} out of range for line {position.line} (length {length})"
            )

    def _check_line(self, line: int) -> None:
        if not 0 <= line < len(self._lines):
            raise IndexError(f"Line {line} out of range (line count {len(self._lines)})")

    def __repr__(self) -> str:
        return f"TextDocument(lines={len(self._lines)}, length={len(self._text)}, eol={self._eol!r})"


__all__ = ["TextDocument", "detect_eol", "SUPPORTED_EOLS"]
