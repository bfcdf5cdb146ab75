"""Named command entry points for the whitespace motions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from ..ui.actions import WindowAction
from .engine import CursorMotionEngine, MotionDirection, MotionResult
from .host import EditorHost

LOGGER = logging.getLogger(__name__)

NEXT_WHITESPACE_COMMAND = "goToNextWhiteSpaceInDocument"
PREVIOUS_WHITESPACE_COMMAND = "goToPreviousWhiteSpaceInDocument"
DEFAULT_NEXT_SHORTCUT = "Alt+Right"
DEFAULT_PREVIOUS_SHORTCUT = "Alt+Left"

_DEFAULT_ENGINE = CursorMotionEngine()


def move_to_next_whitespace_boundary(
    host: EditorHost,
    *,
    engine: CursorMotionEngine | None = None,
) -> MotionResult:
    """Jump past the next whitespace run, or to the next line when at a line end."""

    return (engine or _DEFAULT_ENGINE).apply(host, MotionDirection.FORWARD)


def move_to_previous_whitespace_boundary(
    host: EditorHost,
    *,
    engine: CursorMotionEngine | None = None,
) -> MotionResult:
    """Jump before the previous whitespace run, or to the previous line when at a line start."""

    return (engine or _DEFAULT_ENGINE).apply(host, MotionDirection.BACKWARD)


@dataclass(slots=True)
class MotionCommand:
    """Descriptor binding a command id to a motion direction."""

    command_id: str
    title: str
    direction: MotionDirection
    shortcut: str | None = None
    description: str = ""
    engine: CursorMotionEngine = field(default_factory=CursorMotionEngine)

    def run(self, host: EditorHost) -> MotionResult:
        return self.engine.apply(host, self.direction)


class CommandRegistry:
    """Lookup table of motion commands keyed by command id."""

    def __init__(self) -> None:
        self._commands: dict[str, MotionCommand] = {}

    def register(self, command: MotionCommand, *, replace: bool = False) -> MotionCommand:
        if command.command_id in self._commands and not replace:
            raise ValueError(f"Command already registered: {command.command_id}")
        self._commands[command.command_id] = command
        return command

    def get(self, command_id: str) -> MotionCommand:
        try:
            return self._commands[command_id]
        except KeyError:
            raise KeyError(f"Unknown command: {command_id}") from None

    def execute(self, command_id: str, host: EditorHost) -> MotionResult:
        command = self.get(command_id)
        LOGGER.debug("Executing command %s", command_id)
        return command.run(host)

    def commands(self) -> tuple[MotionCommand, ...]:
        return tuple(self._commands.values())

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __iter__(self) -> Iterator[MotionCommand]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


def default_registry(settings: Any | None = None) -> CommandRegistry:
    """Return a registry holding both whitespace motions configured from ``settings``."""

    engine = CursorMotionEngine.from_settings(settings) if settings is not None else CursorMotionEngine()
    next_shortcut = getattr(settings, "next_shortcut", None) or DEFAULT_NEXT_SHORTCUT
    previous_shortcut = getattr(settings, "previous_shortcut", None) or DEFAULT_PREVIOUS_SHORTCUT

    registry = CommandRegistry()
    registry.register(
        MotionCommand(
            command_id=NEXT_WHITESPACE_COMMAND,
            title="Go to Next White Space",
            direction=MotionDirection.FORWARD,
            shortcut=next_shortcut,
            description="Jump to the end of the next run of white space",
            engine=engine,
        )
    )
    registry.register(
        MotionCommand(
            command_id=PREVIOUS_WHITESPACE_COMMAND,
            title="Go to Previous White Space",
            direction=MotionDirection.BACKWARD,
            shortcut=previous_shortcut,
            description="Jump to the start of the previous run of white space",
            engine=engine,
        )
    )
    return registry


def build_window_actions(registry: CommandRegistry, host: EditorHost) -> Mapping[str, WindowAction]:
    """Expose registered commands as window actions bound to ``host``."""

    actions: dict[str, WindowAction] = {}
    for command in registry:
        actions[command.command_id] = WindowAction(
            name=command.command_id,
            text=command.title,
            shortcut=command.shortcut,
            status_tip=command.description or None,
            callback=_bind(command, host),
        )
    return actions


def _bind(command: MotionCommand, host: EditorHost):
    def _callback() -> MotionResult:
        return command.run(host)

    return _callback


__all__ = [
    "CommandRegistry",
    "MotionCommand",
    "NEXT_WHITESPACE_COMMAND",
    "PREVIOUS_WHITESPACE_COMMAND",
    "build_window_actions",
    "default_registry",
    "move_to_next_whitespace_boundary",
    "move_to_previous_whitespace_boundary",
]
