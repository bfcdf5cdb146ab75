"""UI action data structures bound to window shortcuts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(slots=True)
class WindowAction:
    """Represents a high-level action exposed through shortcuts and menus."""

    name: str
    text: str
    shortcut: str | None = None
    status_tip: str | None = None
    callback: Callable[[], Any] | None = None

    def trigger(self) -> Any:
        """Invoke the registered callback, if available."""

        if self.callback is not None:
            return self.callback()
        return None


__all__ = ["WindowAction"]
