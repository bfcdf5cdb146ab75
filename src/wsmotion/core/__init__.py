"""Core domain types and utilities.

This package contains the coordinate types shared by documents, the motion
engine and the editor host.
"""

from .positions import Position, PositionRange

__all__ = ["Position", "PositionRange"]
