"""Protocols describing the editor surface the motion engine talks to."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.positions import Position, PositionRange


@runtime_checkable
class DocumentHost(Protocol):
    """Read-only document capabilities required by cursor motions."""

    @property
    def line_count(self) -> int:
        ...

    def line_length(self, line: int) -> int:
        ...

    def offset_at(self, position: Position) -> int:
        ...

    def position_at(self, offset: int) -> Position:
        ...

    def get_text(self, text_range: PositionRange | None = None) -> str:
        ...


@runtime_checkable
class EditorHost(Protocol):
    """Editor capabilities used to read and move the cursor."""

    def document(self) -> DocumentHost:
        ...

    def cursor_position(self) -> Position:
        """Return the start of the active selection."""
        ...

    def set_cursor(self, position: Position) -> None:
        """Collapse the selection to ``position``."""
        ...

    def notify(self, message: str) -> None:
        """Show a best-effort informational message."""
        ...


__all__ = ["DocumentHost", "EditorHost"]
