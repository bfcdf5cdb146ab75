"""Application bootstrap helpers for the wsmotion desktop editor."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, cast

from .editor.document_model import DocumentMetadata, DocumentState
from .editor.editor_widget import EditorWidget
from .motion.commands import CommandRegistry, build_window_actions, default_registry
from .services.settings import Settings, SettingsStore
from .utils import logging as logging_utils
from .widgets.status_bar import StatusBar

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_LOGGER = logging.getLogger(__name__)
RECENT_FILES_LIMIT = 10


@dataclass(slots=True)
class EditorSession:
    """Editor, status bar and command registry wired together."""

    editor: EditorWidget
    status_bar: StatusBar
    registry: CommandRegistry
    settings: Settings


def configure_logging(debug: bool = False, *, trace_motions: bool = False, force: bool = False) -> None:
    """Configure structured logging for the application."""

    level = logging.DEBUG if debug else logging.INFO
    logging_utils.setup_logging(level, force=force)
    logging_utils.set_motion_tracing(trace_motions)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))
    _install_qt_message_handler()


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        settings = active_store.load(overrides=overrides)
    except OSError as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        settings = Settings()
    return settings


def remember_recent_file(
    settings: Settings,
    path: Path,
    *,
    store: SettingsStore | None = None,
    limit: int = RECENT_FILES_LIMIT,
) -> list[str]:
    """Move ``path`` to the front of ``settings.recent_files`` and persist the list.

    Only ``recent_files`` is written over the file contents; CLI and
    environment overrides are not persisted.
    """

    normalized = str(path.expanduser().resolve())
    updated: list[str] = [normalized]
    for existing in settings.recent_files:
        if str(Path(existing).expanduser().resolve()) == normalized:
            continue
        if len(updated) >= limit:
            break
        updated.append(existing)
    settings.recent_files = updated
    _LOGGER.debug("Recent file %s (total=%d)", normalized, len(updated))
    if store is not None:
        try:
            persisted = store.load_file()
            persisted.recent_files = list(updated)
            store.save(persisted)
        except OSError as exc:
            _LOGGER.warning("Failed to record recent file in %s: %s", store.path, exc)
    return updated


def read_document(path: Path) -> DocumentState:
    """Read ``path`` into a :class:`DocumentState`, preserving its line endings."""

    with path.open("r", encoding="utf-8", newline="") as handle:
        text = handle.read()
    return DocumentState(text=text, metadata=DocumentMetadata(path=path))


def build_session(
    settings: Settings,
    *,
    document: DocumentState | None = None,
    parent: Any | None = None,
) -> EditorSession:
    """Create the editor widget with its status bar and motion shortcuts."""

    status_bar = StatusBar(parent)
    editor = EditorWidget(parent, status_bar=status_bar, notice_timeout_ms=settings.notice_timeout_ms)
    if document is not None:
        editor.load_document(document)
    registry = default_registry(settings)
    editor.install_actions(build_window_actions(registry, editor))
    return EditorSession(editor=editor, status_bar=status_bar, registry=registry, settings=settings)


def create_qapp() -> Any:
    """Create (or reuse) the ``QApplication`` instance."""

    try:  # Local import to avoid mandatory PySide6 dependency at import time.
        from PySide6.QtWidgets import QApplication
    except ImportError as exc:  # pragma: no cover - depends on desktop stack
        raise RuntimeError("PySide6 must be installed to launch the wsmotion editor.") from exc

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    app = cast(Any, QApplication.instance() or QApplication(sys.argv))
    app.setApplicationName("wsmotion")
    app.setApplicationDisplayName("wsmotion")
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point invoked by the `wsmotion` console script."""

    args = _parse_cli_args(argv)
    debug = args.debug or _env_flag("WSMOTION_DEBUG", default=False)
    configure_logging(debug)

    settings_path = Path(args.settings_path).expanduser() if args.settings_path else None
    store = SettingsStore(settings_path)
    settings = load_settings(store=store)
    if settings.debug_logging or settings.trace_motions:
        configure_logging(debug or settings.debug_logging, trace_motions=settings.trace_motions, force=True)

    document: DocumentState | None = None
    if args.path:
        try:
            document = read_document(Path(args.path).expanduser())
        except OSError as exc:
            print(f"Unable to open {args.path}: {exc}", file=sys.stderr)
            return 2
        remember_recent_file(settings, Path(args.path), store=store)

    app = create_qapp()
    window = _build_main_window(settings, document)
    window.show()
    _LOGGER.info("wsmotion started")
    return int(app.exec())


def _build_main_window(settings: Settings, document: DocumentState | None) -> Any:
    from PySide6.QtGui import QFont
    from PySide6.QtWidgets import QMainWindow

    window = QMainWindow()
    session = build_session(settings, document=document, parent=window)
    window.setCentralWidget(session.editor)
    bar = session.status_bar.widget()
    if bar is not None:
        window.setStatusBar(bar)
    editor = session.editor.widget()
    if editor is not None:
        editor.setFont(QFont(settings.font_family, settings.font_size))
    title = document.metadata.display_name if document is not None else "untitled"
    window.setWindowTitle(f"{title} - wsmotion")
    window.resize(900, 640)
    # shortcut callbacks hold the registry; it must live as long as the window
    window._wsmotion_session = session  # type: ignore[attr-defined]
    return window


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="wsmotion", description="Plain-text editor with whitespace jumps.")
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument("--settings-path", default=os.environ.get("WSMOTION_SETTINGS_PATH"))
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv) if argv is not None else None)


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _install_qt_message_handler() -> None:
    """Redirect Qt warnings to the Python logging stack when available."""

    try:
        from PySide6.QtCore import QtMsgType, qInstallMessageHandler
    except Exception:  # pragma: no cover - PySide6 optional during tests
        return

    level_map = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _handler(mode, context, message):  # type: ignore[no-untyped-def]
        del context
        level = level_map.get(mode, logging.INFO)
        logging.getLogger("PySide6").log(level, message)

    qInstallMessageHandler(_handler)


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
