"""Tests covering the application bootstrap helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from wsmotion import app
from wsmotion.core.positions import Position
from wsmotion.motion import NEXT_WHITESPACE_COMMAND, PREVIOUS_WHITESPACE_COMMAND
from wsmotion.services.settings import Settings, SettingsStore


@pytest.fixture(autouse=True)
def _ensure_qapp(qapp):  # pragma: no cover - pytest-qt provides the fixture
    return qapp


def test_read_document_preserves_crlf(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_bytes(b"foo   bar\r\nbaz")

    document = app.read_document(target)

    assert document.text == "foo   bar\r\nbaz"
    assert document.metadata.path == target


def test_load_settings_uses_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WSMOTION_NEXT_SHORTCUT", raising=False)
    path = tmp_path / "settings.json"
    SettingsStore(path).save(Settings(next_shortcut="Ctrl+L"))

    settings = app.load_settings(path, overrides={"font_size": 20})

    assert settings.next_shortcut == "Ctrl+L"
    assert settings.font_size == 20


def test_load_settings_falls_back_on_os_error(tmp_path: Path) -> None:
    class _BrokenStore:
        path = tmp_path / "settings.json"

        def load(self, *, overrides: Any = None) -> Settings:
            raise PermissionError("denied")

    settings = app.load_settings(store=_BrokenStore())  # type: ignore[arg-type]

    assert settings == Settings()


def test_build_session_wires_editor_commands_and_status_bar(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_text("alpha beta", encoding="utf-8")
    settings = Settings(notice_timeout_ms=1200, end_of_document_notice="Done.")

    session = app.build_session(settings, document=app.read_document(target))

    assert session.settings is settings
    assert NEXT_WHITESPACE_COMMAND in session.registry
    assert session.editor.status_bar is session.status_bar

    session.editor.trigger_action(NEXT_WHITESPACE_COMMAND)
    assert session.editor.cursor_position() == Position(0, 6)
    session.editor.trigger_action(NEXT_WHITESPACE_COMMAND)
    session.editor.trigger_action(NEXT_WHITESPACE_COMMAND)
    assert session.status_bar.message == "Done."
    assert session.status_bar.message_timeout == 1200

    session.editor.trigger_action(PREVIOUS_WHITESPACE_COMMAND)
    assert session.editor.cursor_position() == Position(0, 5)


def test_parse_cli_args() -> None:
    args = app._parse_cli_args(["--debug", "--settings-path", "custom.json", "notes.txt"])

    assert args.debug is True
    assert args.settings_path == "custom.json"
    assert args.path == "notes.txt"


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WSMOTION_DEBUG", "on")
    assert app._env_flag("WSMOTION_DEBUG") is True

    monkeypatch.setenv("WSMOTION_DEBUG", "off")
    assert app._env_flag("WSMOTION_DEBUG") is False

    monkeypatch.delenv("WSMOTION_DEBUG")
    assert app._env_flag("WSMOTION_DEBUG", default=True) is True


def test_main_reports_unreadable_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(app, "configure_logging", lambda *args, **kwargs: calls.append(kwargs))
    missing = tmp_path / "missing.txt"

    exit_code = app.main(["--settings-path", str(tmp_path / "settings.json"), str(missing)])

    assert exit_code == 2
    assert "Unable to open" in capsys.readouterr().err
    assert calls
    assert not (tmp_path / "settings.json").exists()


def test_remember_recent_file_moves_path_to_front_and_caps_list(tmp_path: Path) -> None:
    files = [tmp_path / f"file{index}.txt" for index in range(4)]
    settings = Settings(recent_files=[str(path.resolve()) for path in files])

    updated = app.remember_recent_file(settings, files[2], limit=3)

    assert updated == [str(files[2].resolve()), str(files[0].resolve()), str(files[1].resolve())]
    assert settings.recent_files == updated


def test_remember_recent_file_persists_only_the_list(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "settings.json"
    store = SettingsStore(path)
    store.save(Settings(font_size=15))
    monkeypatch.setenv("WSMOTION_FONT_SIZE", "30")
    settings = app.load_settings(store=store)
    target = tmp_path / "notes.txt"

    app.remember_recent_file(settings, target, store=store)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert settings.font_size == 30
    assert payload["font_size"] == 15
    assert payload["recent_files"] == [str(target.resolve())]


def test_main_records_opened_file_in_recent_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    class _App:
        def exec(self) -> int:
            return 0

    class _Window:
        shown = False

        def show(self) -> None:
            self.shown = True

    built: list[tuple[_Window, Settings, Any]] = []

    def _build_main_window(settings: Settings, document: Any) -> _Window:
        window = _Window()
        built.append((window, settings, document))
        return window

    monkeypatch.setattr(app, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(app, "create_qapp", lambda: _App())
    monkeypatch.setattr(app, "_build_main_window", _build_main_window)
    target = tmp_path / "notes.txt"
    target.write_text("alpha beta", encoding="utf-8")
    settings_path = tmp_path / "settings.json"

    exit_code = app.main(["--settings-path", str(settings_path), str(target)])

    assert exit_code == 0
    window, settings, document = built[0]
    assert window.shown is True
    assert document.text == "alpha beta"
    assert settings.recent_files == [str(target.resolve())]
    assert SettingsStore(settings_path).load().recent_files == [str(target.resolve())]
