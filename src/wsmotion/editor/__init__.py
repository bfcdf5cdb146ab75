"""Editor package containing document models and the editor widget."""

from . import document_model, editor_widget
from .document_model import DocumentMetadata, DocumentState, SelectionRange
from .editor_widget import EditorWidget

__all__ = [
    "DocumentMetadata",
    "DocumentState",
    "EditorWidget",
    "SelectionRange",
    "document_model",
    "editor_widget",
]
