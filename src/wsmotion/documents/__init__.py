"""Document abstractions consumed by the motion engine."""

from .text_document import TextDocument, detect_eol

__all__ = ["TextDocument", "detect_eol"]
