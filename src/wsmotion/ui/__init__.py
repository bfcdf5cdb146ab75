"""UI-level descriptors shared by the desktop shell."""

from .actions import WindowAction

__all__ = ["WindowAction"]
