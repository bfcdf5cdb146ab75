"""Plain-text editor surface that the cursor motions operate on.

All editor state (buffer, selection, listeners) lives in Python so the motion
commands work without a display. When PySide6 is importable and a
``QApplication`` exists, the widget also owns a ``QPlainTextEdit`` and keeps
it in sync in both directions.

Selections are offsets into the buffer, where ``"\\r\\n"`` counts as two
characters. Qt stores every break as one character, so Qt cursor positions
are translated through line/character positions rather than offsets.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Protocol, Sequence

from ..core.positions import Position
from ..documents.text_document import TextDocument
from ..ui.actions import WindowAction
from ..widgets.status_bar import StatusBar
from .document_model import DocumentState, SelectionRange

LOGGER = logging.getLogger(__name__)

try:  # pragma: no cover - PySide6 optional in CI
    from PySide6 import QtGui, QtWidgets
except Exception:  # pragma: no cover - runtime fallback
    QtGui = None  # type: ignore[assignment]
    QtWidgets = None  # type: ignore[assignment]

    class _HeadlessWidget:
        """Base class used when PySide6 is missing."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            del args, kwargs

    _WidgetBase: Any = _HeadlessWidget
else:
    _WidgetBase = QtWidgets.QWidget


class TextChangeListener(Protocol):
    """Called with the new buffer after every text change."""

    def __call__(self, text: str, state: DocumentState) -> None:
        ...


class SelectionListener(Protocol):
    """Called with the selection and the 1-based caret line and column."""

    def __call__(self, selection: SelectionRange, line: int, column: int) -> None:
        ...


def _qt_running() -> bool:
    if QtWidgets is None:
        return False
    try:
        return QtWidgets.QApplication.instance() is not None
    except Exception:  # pragma: no cover - Qt may be half-initialised
        return False


class EditorWidget(_WidgetBase):
    """Editor that implements the cursor-motion host interface.

    ``document()``, ``cursor_position()``, ``set_cursor()`` and ``notify()``
    are what :class:`~wsmotion.motion.engine.CursorMotionEngine` calls; the rest
    loads text, tracks the selection and binds shortcut actions.
    """

    DEFAULT_NOTICE_TIMEOUT_MS = 3000

    def __init__(
        self,
        parent: Any | None = None,
        *,
        status_bar: StatusBar | None = None,
        notice_timeout_ms: int | None = None,
    ) -> None:
        super().__init__(parent)
        self._state = DocumentState()
        self._document = TextDocument("")
        self._selection = SelectionRange()
        # offset of the moving end of the selection, which may be its start
        self._caret = 0
        self._status_bar = status_bar
        if notice_timeout_ms is None:
            notice_timeout_ms = self.DEFAULT_NOTICE_TIMEOUT_MS
        self._notice_timeout_ms = max(0, int(notice_timeout_ms))
        self._last_notice: str | None = None
        self._text_listeners: list[TextChangeListener] = []
        self._selection_listeners: list[SelectionListener] = []
        self._actions: dict[str, WindowAction] = {}
        self._shortcuts: list[Any] = []
        self._qt_editor: Any = self._create_qt_editor() if _qt_running() else None

    def _create_qt_editor(self) -> Any:
        editor = QtWidgets.QPlainTextEdit(self)
        editor.textChanged.connect(self._on_qt_text_changed)  # type: ignore[attr-defined]
        editor.cursorPositionChanged.connect(self._on_qt_cursor_moved)  # type: ignore[attr-defined]
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(editor)
        return editor

    # ------------------------------------------------------------------
    # Shortcuts and status bar
    # ------------------------------------------------------------------
    def attach_status_bar(self, status_bar: StatusBar | None) -> None:
        """Route notices and caret updates to ``status_bar``."""

        self._status_bar = status_bar
        if status_bar is not None:
            status_bar.set_line_ending(self._document.eol)
            self._emit_selection_changed()

    def install_actions(self, actions: Mapping[str, WindowAction]) -> None:
        """Register ``actions`` and, with Qt, bind each shortcut to the editor."""

        self._actions.update(actions)
        if self._qt_editor is None:
            return
        for action in actions.values():
            if not action.shortcut:
                continue
            shortcut = QtGui.QShortcut(QtGui.QKeySequence(action.shortcut), self._qt_editor)
            shortcut.activated.connect(action.trigger)  # type: ignore[attr-defined]
            self._shortcuts.append(shortcut)
            LOGGER.debug("Bound %s to %s", action.name, action.shortcut)

    def trigger_action(self, name: str) -> Any:
        """Run an installed action as if its shortcut had been pressed."""

        action = self._actions.get(name)
        if action is None:
            raise KeyError(f"Unknown action: {name}")
        return action.trigger()

    def installed_actions(self) -> Mapping[str, WindowAction]:
        return dict(self._actions)

    # ------------------------------------------------------------------
    # Loading and editing text
    # ------------------------------------------------------------------
    def load_document(self, document: DocumentState) -> None:
        """Show ``document`` with the caret at its start."""

        self._state = document
        self._document = TextDocument(document.text)
        self._selection = SelectionRange()
        self._caret = 0
        self._push_text_to_qt()
        if self._status_bar is not None:
            self._status_bar.set_line_ending(self._document.eol)
        self._emit_text_changed()
        self._emit_selection_changed()

    def to_document(self) -> DocumentState:
        """Write the buffer and selection back into the loaded state and return it."""

        self._state.text = self._document.text
        self._state.selection = self.selection_range()
        return self._state

    def set_text(self, text: str, *, mark_dirty: bool = True) -> None:
        """Replace the buffer, keeping the selection inside the new text."""

        replacement = TextDocument(text)
        if replacement.text == self._document.text:
            return
        self._document = replacement
        if mark_dirty:
            self._state.update_text(replacement.text)
        else:
            self._state.text = replacement.text
        self._push_text_to_qt()
        self._emit_text_changed()
        self._set_selection((self._anchor(), self._caret))

    def add_text_listener(self, listener: TextChangeListener) -> None:
        self._text_listeners.append(listener)

    def add_selection_listener(self, listener: SelectionListener) -> None:
        self._selection_listeners.append(listener)

    # ------------------------------------------------------------------
    # Cursor-motion host interface
    # ------------------------------------------------------------------
    def document(self) -> TextDocument:
        """Return the line-indexed snapshot of the current buffer."""

        return self._document

    def cursor_position(self) -> Position:
        """Return the position of the selection start."""

        return self._document.position_at(self._selection.start)

    def set_cursor(self, position: Position | Sequence[int] | Mapping[str, int]) -> None:
        """Collapse the selection to ``position``.

        Raises :class:`IndexError` when ``position`` lies outside the document.
        """

        offset = self._document.offset_at(Position.from_value(position))
        self._set_selection(SelectionRange(offset, offset))

    def notify(self, message: str) -> None:
        """Record ``message`` and show it in the status bar for the notice timeout."""

        self._last_notice = message
        LOGGER.info("%s", message)
        if self._status_bar is None:
            return
        try:
            self._status_bar.set_message(message, timeout_ms=self._notice_timeout_ms or None)
        except Exception:  # notices are best effort
            LOGGER.debug("Status bar rejected notice %r", message, exc_info=True)

    @property
    def last_notice(self) -> str | None:
        return self._last_notice

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def line_count(self) -> int:
        return self._document.line_count

    @property
    def status_bar(self) -> StatusBar | None:
        return self._status_bar

    def widget(self) -> Any | None:
        """Return the underlying :class:`QPlainTextEdit` when available."""

        return self._qt_editor

    def selection_range(self) -> SelectionRange:
        return SelectionRange(self._selection.start, self._selection.end)

    def selection_span(self) -> tuple[int, int]:
        return self._selection.as_tuple()

    def caret_position(self) -> Position:
        """Return where the caret is drawn; the start of a backwards selection."""

        return self._document.position_at(self._caret)

    def _anchor(self) -> int:
        start, end = self._selection.as_tuple()
        return end if self._caret == start else start

    # ------------------------------------------------------------------
    # Selection plumbing
    # ------------------------------------------------------------------
    def _set_selection(self, selection: SelectionRange | Mapping[str, Any] | Sequence[int]) -> None:
        """Select from ``selection.start`` (anchor) to ``selection.end`` (caret)."""

        try:
            requested = SelectionRange.from_value(selection)
        except (TypeError, ValueError) as exc:
            raise ValueError("Selection must provide start/end bounds") from exc
        limit = len(self._document)
        anchor, caret = (max(0, min(bound, limit)) for bound in requested.as_tuple())
        self._selection = SelectionRange(min(anchor, caret), max(anchor, caret))
        self._caret = caret
        self._push_selection_to_qt(anchor, caret)
        self._emit_selection_changed()

    def _emit_text_changed(self) -> None:
        for listener in list(self._text_listeners):
            listener(self._document.text, self._state)

    def _emit_selection_changed(self) -> None:
        selection = self.selection_range()
        caret = self.caret_position()
        line, column = caret.line + 1, caret.character + 1
        if self._status_bar is not None:
            self._status_bar.update_cursor(line, column)
        for listener in list(self._selection_listeners):
            listener(selection, line, column)

    # ------------------------------------------------------------------
    # Qt synchronisation
    # ------------------------------------------------------------------
    @contextmanager
    def _qt_signals_blocked(self) -> Iterator[Any]:
        editor = self._qt_editor
        editor.blockSignals(True)
        try:
            yield editor
        finally:
            editor.blockSignals(False)

    def _push_text_to_qt(self) -> None:
        if self._qt_editor is None:
            return
        with self._qt_signals_blocked() as editor:
            # QTextDocument splits blocks on "\n" only
            editor.setPlainText("\n".join(self._document.lines))

    def _push_selection_to_qt(self, anchor: int, caret: int) -> None:
        if self._qt_editor is None:
            return
        qt_anchor = self._to_qt_position(anchor)
        qt_caret = self._to_qt_position(caret)
        with self._qt_signals_blocked() as editor:
            cursor = editor.textCursor()
            cursor.setPosition(qt_anchor)
            cursor.setPosition(qt_caret, QtGui.QTextCursor.MoveMode.KeepAnchor)
            editor.setTextCursor(cursor)

    def _to_qt_position(self, offset: int) -> int:
        position = self._document.position_at(offset)
        block = self._qt_editor.document().findBlockByNumber(position.line)
        return block.position() + position.character

    def _from_qt_position(self, qt_position: int) -> int:
        block = self._qt_editor.document().findBlock(qt_position)
        line = min(max(0, block.blockNumber()), self._document.line_count - 1)
        character = min(max(0, qt_position - block.position()), self._document.line_length(line))
        return self._document.offset_at(Position(line, character))

    def _on_qt_text_changed(self) -> None:
        eol = self._document.eol
        text = self._qt_editor.toPlainText()
        if eol != "\n":
            text = text.replace("\n", eol)
        self._document = TextDocument(text, eol=eol)
        self._state.update_text(self._document.text)
        self._emit_text_changed()
        # Qt reports the caret move before the text change, so the selection
        # was mapped through the previous document
        self._on_qt_cursor_moved()

    def _on_qt_cursor_moved(self) -> None:
        cursor = self._qt_editor.textCursor()
        anchor = self._from_qt_position(cursor.anchor())
        caret = self._from_qt_position(cursor.position())
        self._selection = SelectionRange(min(anchor, caret), max(anchor, caret))
        self._caret = caret
        self._emit_selection_changed()


__all__ = ["EditorWidget", "SelectionListener", "TextChangeListener"]
