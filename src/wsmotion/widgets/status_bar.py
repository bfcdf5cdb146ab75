"""Status bar showing motion notices, the caret and the line ending."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

try:  # pragma: no cover - Qt imports are optional during tests
    from PySide6.QtWidgets import QApplication, QLabel, QStatusBar
except Exception:  # pragma: no cover - PySide6 not available
    QApplication = None  # type: ignore[assignment]
    QLabel = None  # type: ignore[assignment]
    QStatusBar = None  # type: ignore[assignment]

LOGGER = logging.getLogger(__name__)

_EOL_LABELS = {"\n": "LF", "\r\n": "CRLF"}


def _best_effort(action: Callable[[], Any], what: str) -> None:
    try:
        action()
    except Exception:  # pragma: no cover - Qt widget already torn down
        LOGGER.debug("Status bar %s failed", what, exc_info=True)


class StatusBar:
    """Status bar state that mirrors into a ``QStatusBar`` when Qt is running.

    The message, its timeout, the 1-based caret and the line-ending label are
    always tracked in Python so editor code and tests can read them back.
    """

    def __init__(self, parent: Any | None = None) -> None:
        self._message: str = ""
        self._message_timeout: Optional[int] = None
        self._cursor: tuple[int, int] = (1, 1)
        self._line_ending: str = "LF"
        self._cursor_label: Any = None
        self._eol_label: Any = None
        self._qt_bar = self._create_qt_bar(parent)

    def set_message(self, message: str, *, timeout_ms: Optional[int] = None) -> None:
        """Show ``message``; Qt clears it after ``timeout_ms`` when given."""

        self._message = message
        self._message_timeout = timeout_ms
        bar = self._qt_bar
        if bar is not None:
            _best_effort(lambda: bar.showMessage(message, timeout_ms or 0), "showMessage")

    def clear_message(self) -> None:
        self._message = ""
        self._message_timeout = None
        bar = self._qt_bar
        if bar is not None:
            _best_effort(bar.clearMessage, "clearMessage")

    def update_cursor(self, line: int, column: int) -> None:
        """Update the caret indicator; both values are 1-based."""

        self._cursor = (max(1, line), max(1, column))
        self._set_label(self._cursor_label, self.cursor_text)

    def set_line_ending(self, eol: str) -> None:
        self._line_ending = _EOL_LABELS.get(eol, eol.strip().upper() or "LF")
        self._set_label(self._eol_label, self._line_ending)

    def widget(self) -> Any | None:
        """Return the underlying :class:`QStatusBar` when available."""

        return self._qt_bar

    @property
    def message(self) -> str:
        return self._message

    @property
    def message_timeout(self) -> Optional[int]:
        return self._message_timeout

    @property
    def cursor_position(self) -> tuple[int, int]:
        return self._cursor

    @property
    def cursor_text(self) -> str:
        line, column = self._cursor
        return f"Ln {line}, Col {column}"

    @property
    def line_ending(self) -> str:
        return self._line_ending

    # Qt plumbing -------------------------------------------------------
    def _create_qt_bar(self, parent: Any | None) -> Any | None:
        if QStatusBar is None or QLabel is None or QApplication is None:
            return None
        if QApplication.instance() is None:
            return None

        bar = QStatusBar(parent)
        bar.setObjectName("wsm-status-bar")
        bar.messageChanged.connect(self._on_qt_message_changed)

        self._cursor_label = QLabel(self.cursor_text)
        self._cursor_label.setObjectName("wsm-status-cursor")
        self._eol_label = QLabel(self._line_ending)
        self._eol_label.setObjectName("wsm-status-eol")
        for label in (self._cursor_label, self._eol_label):
            label.setContentsMargins(8, 0, 8, 0)
            bar.addPermanentWidget(label)
        return bar

    def _set_label(self, label: Any, text: str) -> None:
        if label is not None:
            _best_effort(lambda: label.setText(text), "label update")

    def _on_qt_message_changed(self, text: str) -> None:
        # fires when a timed message expires
        self._message = text
        if not text:
            self._message_timeout = None


__all__ = ["StatusBar"]
