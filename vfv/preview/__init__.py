"""Preview content: styled line types, the highlighter, and scroll state."""

from __future__ import annotations

from .buffer import PreviewBuffer
from .highlight import BINARY_SENTINEL, DIRECTORY_SENTINEL, render_preview
from .types import PreviewLine, StyledSegment, TextStyle

__all__ = [
    "BINARY_SENTINEL",
    "DIRECTORY_SENTINEL",
    "PreviewBuffer",
    "PreviewLine",
    "StyledSegment",
    "TextStyle",
    "render_preview",
]
