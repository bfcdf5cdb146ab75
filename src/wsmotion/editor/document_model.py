"""Dataclasses describing the document loaded into the editor."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class DocumentMetadata:
    """Where the document came from and when it last changed."""

    path: Optional[Path] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def display_name(self) -> str:
        return self.path.name if self.path is not None else "untitled"


@dataclass(slots=True)
class SelectionRange:
    """Selection as ``[start, end)`` offsets into the buffer; a caret when both match."""

    start: int = 0
    end: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    @classmethod
    def from_value(cls, value: Any) -> SelectionRange:
        """Coerce a selection, ``{"start", "end"}`` mapping, pair or similar object."""

        if isinstance(value, SelectionRange):
            return cls(value.start, value.end)
        if isinstance(value, Mapping):
            start, end = value.get("start"), value.get("end")
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if len(value) != 2:
                raise ValueError("Selection sequences must have exactly two entries")
            start, end = value
        else:
            start, end = getattr(value, "start", None), getattr(value, "end", None)
        if start is None or end is None:
            raise TypeError("Unsupported selection input")
        return cls(int(start), int(end))


@dataclass(slots=True)
class DocumentState:
    """Text, selection and edit status of the open document."""

    text: str = ""
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    selection: SelectionRange = field(default_factory=SelectionRange)
    dirty: bool = False
    revision: int = 0

    def update_text(self, new_text: str) -> None:
        """Replace the text, bump the revision and mark the document dirty."""

        self.text = new_text
        self.dirty = True
        self.revision += 1
        self.metadata.updated_at = _utcnow()


__all__ = ["DocumentMetadata", "DocumentState", "SelectionRange"]
