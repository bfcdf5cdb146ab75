"""Shared pytest fixtures."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from wsmotion.documents.text_document import TextDocument  # noqa: E402

from tests.helpers import RecordingHost  # noqa: E402


@pytest.fixture
def spaced_document() -> TextDocument:
    return TextDocument.from_lines(["foo   bar", "baz"])


@pytest.fixture
def make_host():
    def _factory(lines, cursor=(0, 0), *, eol: str = "\n") -> RecordingHost:
        return RecordingHost(TextDocument.from_lines(lines, eol=eol), cursor)

    return _factory
