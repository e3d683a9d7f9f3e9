"""Scroll state over a fixed sequence of preview lines."""

from __future__ import annotations

from collections.abc import Sequence

from .types import PreviewLine

DEFAULT_VIEWPORT_HEIGHT = 20


class PreviewBuffer:
    """Tracks ``scroll_offset`` within ``[0, max(0, total - viewport_height)]``.

    ``viewport_height`` comes from the render layer every frame; every scroll
    operation re-clamps against it, not only resizes.
    """

    def __init__(self, lines: Sequence[PreviewLine], viewport_height: int = DEFAULT_VIEWPORT_HEIGHT) -> None:
        self.lines: tuple[PreviewLine, ...] = tuple(lines)
        self.viewport_height = max(0, viewport_height)
        self.scroll_offset = 0

    @classmethod
    def build(cls, lines: Sequence[PreviewLine], viewport_height: int = DEFAULT_VIEWPORT_HEIGHT) -> PreviewBuffer:
        return cls(lines, viewport_height)

    @property
    def total_lines(self) -> int:
        return len(self.lines)

    @property
    def max_offset(self) -> int:
        return max(0, len(self.lines) - self.viewport_height)

    def _clamp(self) -> None:
        self.scroll_offset = max(0, min(self.scroll_offset, self.max_offset))

    def set_viewport_height(self, height: int) -> None:
        self.viewport_height = max(0, height)
        self._clamp()

    def scroll_up(self, amount: int) -> None:
        self.scroll_offset -= max(0, amount)
        self._clamp()

    def scroll_down(self, amount: int) -> None:
        self.scroll_offset += max(0, amount)
        self._clamp()

    def scroll_to_top(self) -> None:
        self.scroll_offset = 0

    def scroll_to_bottom(self) -> None:
        self.scroll_offset = self.max_offset

    def half_page(self) -> int:
        return max(1, self.viewport_height // 2)

    def full_page(self) -> int:
        return max(1, self.viewport_height - 2)

    def visible_slice(self) -> tuple[PreviewLine, ...]:
        self._clamp()
        return self.lines[self.scroll_offset : self.scroll_offset + self.viewport_height]

    def position_label(self) -> str:
        """``[first-last/total]`` for the title bar (1-based, inclusive)."""
        total = len(self.lines)
        if total == 0:
            return "[0-0/0]"
        last = min(total, self.scroll_offset + self.viewport_height)
        return f"[{self.scroll_offset + 1}-{last}/{total}]"
