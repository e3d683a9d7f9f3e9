"""Library-independent styled text types for preview content."""

from __future__ import annotations

from dataclasses import dataclass

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class TextStyle:
    fg: RGB | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False


PLAIN_STYLE = TextStyle()


@dataclass(frozen=True)
class StyledSegment:
    style: TextStyle
    text: str


@dataclass(frozen=True)
class PreviewLine:
    """One rendered source line; ``line_number`` is 0 for sentinel messages."""

    line_number: int
    segments: tuple[StyledSegment, ...]

    @property
    def plain_text(self) -> str:
        return "".join(segment.text for segment in self.segments)


def message_line(text: str) -> PreviewLine:
    return PreviewLine(line_number=0, segments=(StyledSegment(PLAIN_STYLE, text),))


def parse_hex_color(value: str | None) -> RGB | None:
    """Convert ``"rrggbb"``/``"#rrggbb"`` (or the 3-digit forms) to an RGB tuple."""
    if not value:
        return None
    value = value.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        return None
    try:
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    except ValueError:
        return None
