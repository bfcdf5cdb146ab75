"""Cursor motion engine and the commands built on it."""

from .commands import (
    CommandRegistry,
    MotionCommand,
    NEXT_WHITESPACE_COMMAND,
    PREVIOUS_WHITESPACE_COMMAND,
    build_window_actions,
    default_registry,
    move_to_next_whitespace_boundary,
    move_to_previous_whitespace_boundary,
)
from .engine import CursorMotionEngine, MotionDirection, MotionReason, MotionResult
from .host import DocumentHost, EditorHost

__all__ = [
    "CommandRegistry",
    "CursorMotionEngine",
    "DocumentHost",
    "EditorHost",
    "MotionCommand",
    "MotionDirection",
    "MotionReason",
    "MotionResult",
    "NEXT_WHITESPACE_COMMAND",
    "PREVIOUS_WHITESPACE_COMMAND",
    "build_window_actions",
    "default_registry",
    "move_to_next_whitespace_boundary",
    "move_to_previous_whitespace_boundary",
]
