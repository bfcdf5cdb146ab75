"""Tests for the motion command registry and entry points."""

from __future__ import annotations

import pytest

from wsmotion.core.positions import Position
from wsmotion.motion import (
    CommandRegistry,
    CursorMotionEngine,
    MotionCommand,
    MotionDirection,
    NEXT_WHITESPACE_COMMAND,
    PREVIOUS_WHITESPACE_COMMAND,
    build_window_actions,
    default_registry,
    move_to_next_whitespace_boundary,
    move_to_previous_whitespace_boundary,
)
from wsmotion.motion.host import EditorHost
from wsmotion.services.settings import Settings
from wsmotion.ui.actions import WindowAction


def test_move_to_next_whitespace_boundary_moves_host(make_host) -> None:
    host = make_host(["foo   bar", "baz"], (0, 0))

    result = move_to_next_whitespace_boundary(host)

    assert result.moved is True
    assert host.cursor == Position(0, 6)


def test_move_to_previous_whitespace_boundary_moves_host(make_host) -> None:
    host = make_host(["foo   bar", "baz"], (1, 0))

    move_to_previous_whitespace_boundary(host)

    assert host.cursor == Position(0, 9)


def test_entry_points_accept_custom_engine(make_host) -> None:
    host = make_host(["end"], (0, 3))
    engine = CursorMotionEngine(end_of_document_notice="Nothing further")

    move_to_next_whitespace_boundary(host, engine=engine)

    assert host.notices == ["Nothing further"]


def test_recording_host_satisfies_editor_protocol(make_host) -> None:
    assert isinstance(make_host(["x"]), EditorHost)


def test_registry_rejects_duplicate_ids() -> None:
    registry = CommandRegistry()
    command = MotionCommand("demo", "Demo", MotionDirection.FORWARD)
    registry.register(command)

    with pytest.raises(ValueError, match="already registered"):
        registry.register(MotionCommand("demo", "Other", MotionDirection.BACKWARD))

    replacement = MotionCommand("demo", "Other", MotionDirection.BACKWARD)
    registry.register(replacement, replace=True)
    assert registry.get("demo") is replacement
    assert len(registry) == 1


def test_registry_unknown_command_raises_key_error(make_host) -> None:
    registry = CommandRegistry()

    with pytest.raises(KeyError, match="Unknown command: missing"):
        registry.get("missing")
    with pytest.raises(KeyError):
        registry.execute("missing", make_host(["x"]))


def test_default_registry_exposes_both_motions() -> None:
    registry = default_registry()

    assert NEXT_WHITESPACE_COMMAND in registry
    assert PREVIOUS_WHITESPACE_COMMAND in registry
    assert [command.command_id for command in registry] == [
        "goToNextWhiteSpaceInDocument",
        "goToPreviousWhiteSpaceInDocument",
    ]
    assert registry.get(NEXT_WHITESPACE_COMMAND).shortcut == "Alt+Right"
    assert registry.get(PREVIOUS_WHITESPACE_COMMAND).shortcut == "Alt+Left"
    assert registry.get(NEXT_WHITESPACE_COMMAND).direction is MotionDirection.FORWARD
    assert registry.get(PREVIOUS_WHITESPACE_COMMAND).direction is MotionDirection.BACKWARD


def test_default_registry_uses_settings() -> None:
    settings = Settings(
        next_shortcut="Ctrl+Alt+L",
        previous_shortcut="Ctrl+Alt+H",
        end_of_document_notice="Bottom of file",
    )

    registry = default_registry(settings)

    assert registry.get(NEXT_WHITESPACE_COMMAND).shortcut == "Ctrl+Alt+L"
    assert registry.get(PREVIOUS_WHITESPACE_COMMAND).shortcut == "Ctrl+Alt+H"
    assert registry.get(NEXT_WHITESPACE_COMMAND).engine.end_of_document_notice == "Bottom of file"
    assert registry.get(PREVIOUS_WHITESPACE_COMMAND).engine.start_of_document_notice == "At start of file."


def test_execute_runs_command_against_host(make_host) -> None:
    registry = default_registry()
    host = make_host(["alpha beta"], (0, 10))

    result = registry.execute(PREVIOUS_WHITESPACE_COMMAND, host)

    assert result.target == Position(0, 5)
    assert host.cursor == Position(0, 5)


def test_build_window_actions_binds_commands_to_host(make_host) -> None:
    registry = default_registry()
    host = make_host(["alpha beta"], (0, 0))

    actions = build_window_actions(registry, host)

    assert set(actions) == {NEXT_WHITESPACE_COMMAND, PREVIOUS_WHITESPACE_COMMAND}
    action = actions[NEXT_WHITESPACE_COMMAND]
    assert isinstance(action, WindowAction)
    assert action.text == "Go to Next White Space"
    assert action.shortcut == "Alt+Right"
    assert action.status_tip

    action.trigger()
    assert host.cursor == Position(0, 6)
    actions[PREVIOUS_WHITESPACE_COMMAND].trigger()
    assert host.cursor == Position(0, 5)


def test_window_action_without_callback_is_noop() -> None:
    action = WindowAction(name="noop", text="Nothing")

    assert action.trigger() is None
