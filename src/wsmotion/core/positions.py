"""Structured helpers for representing line/character coordinates."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(slots=True, frozen=True, order=True)
class Position(Sequence[int]):
    """Zero-based ``(line, character)`` coordinate inside a document."""

    line: int
    character: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", self._coerce_index(self.line, "line"))
        object.__setattr__(self, "character", self._coerce_index(self.character, "character"))

    @staticmethod
    def _coerce_index(value: Any, label: str) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Position {label} must be an integer")
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Position {label} must be an integer") from exc
        if number < 0:
            return 0
        return number

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.line
        if index == 1:
            return self.character
        raise IndexError("Position index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.line
        yield self.character

    def to_tuple(self) -> tuple[int, int]:
        """Return the position as a ``(line, character)`` tuple."""

        return (self.line, self.character)

    def to_dict(self) -> dict[str, int]:
        """Return the position as a JSON-friendly mapping."""

        return {"line": self.line, "character": self.character}

    def with_character(self, character: int) -> Position:
        return Position(self.line, character)

    @classmethod
    def from_value(cls, value: Any) -> Position:
        """Coerce ``value`` into a :class:`Position`."""

        if isinstance(value, Position):
            return value
        if value is None:
            raise ValueError("Position value is required")
        if isinstance(value, Mapping):
            line = value.get("line")
            character = value.get("character")
            if line is None or character is None:
                raise ValueError("Position mappings require line and character keys")
            return cls(line, character)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Position sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        line = getattr(value, "line", None)
        character = getattr(value, "character", None)
        if line is not None and character is not None:
            return cls(line, character)
        raise TypeError("Unsupported Position input")

    @classmethod
    def origin(cls) -> Position:
        """Return the first position of any document."""

        return cls(0, 0)


@dataclass(slots=True, frozen=True)
class PositionRange:
    """Span between two positions, normalised so ``start <= end``."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        start = Position.from_value(self.start)
        end = Position.from_value(self.end)
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the range collapses to a single point."""

        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(start_line, start_character, end_line, end_character)``."""

        return (*self.start.to_tuple(), *self.end.to_tuple())

    @classmethod
    def from_coordinates(
        cls,
        start_line: int,
        start_character: int,
        end_line: int,
        end_character: int,
    ) -> PositionRange:
        return cls(Position(start_line, start_character), Position(end_line, end_character))

    @classmethod
    def caret(cls, position: Position) -> PositionRange:
        """Return an empty range anchored at ``position``."""

        return cls(position, position)


__all__ = ["Position", "PositionRange"]
