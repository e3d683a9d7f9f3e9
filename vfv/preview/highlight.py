"""File loading, sanitization, and syntax highlighting into styled lines.

Pygments picks the lexer from the file name (plain text when unknown) and
the token colors from the configured style (``monokai`` when unknown).
Directories, binary files and unreadable paths produce a single sentinel line.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .types import PLAIN_STYLE, PreviewLine, StyledSegment, TextStyle, message_line, parse_hex_color

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
DEFAULT_MAX_LINES = 1000
BINARY_PROBE_BYTES = 8000
MAX_PREVIEW_BYTES = 10 * 1024 * 1024

DIRECTORY_SENTINEL = "[Directory]"
BINARY_SENTINEL = "[Binary file]"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_STYLE_CACHE: dict[str, StyleMeta] = {}


def is_binary(header: bytes) -> bool:
    """Return whether more than a tenth of the probed prefix is null bytes."""
    probe = header[:BINARY_PROBE_BYTES]
    return probe.count(0) > len(probe) // 10


def decode_text(data: bytes) -> str:
    """Decode using UTF-8, UTF-8 with BOM, then latin-1."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def resolve_style(name: str) -> StyleMeta:
    """Return the Pygments style class for ``name``, defaulting to monokai."""
    cached = _STYLE_CACHE.get(name)
    if cached is not None:
        return cached
    try:
        style = get_style_by_name(name)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", name, DEFAULT_STYLE)
        style = get_style_by_name(DEFAULT_STYLE)
    _STYLE_CACHE[name] = style
    return style


def lexer_for(path: Path, text: str) -> Lexer:
    try:
        return get_lexer_for_filename(path.name, text, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def _read_limited(path: Path, max_lines: int) -> bytes | str:
    """Read the head of ``path``; returns the binary sentinel text for binary files."""
    with path.open("rb") as handle:
        header = handle.read(BINARY_PROBE_BYTES)
        if is_binary(header):
            return BINARY_SENTINEL
        chunks = [header]
        total = len(header)
        newlines = header.count(b"\n")
        while total < MAX_PREVIEW_BYTES and newlines < max_lines:
            chunk = handle.read(min(64 * 1024, MAX_PREVIEW_BYTES - total))
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)
            newlines += chunk.count(b"\n")
    return b"".join(chunks)


def highlight_text(text: str, path: Path, style_name: str = DEFAULT_STYLE) -> list[PreviewLine]:
    """Split ``text`` into numbered lines of styled segments."""
    style = resolve_style(style_name)
    style_cache: dict[object, TextStyle] = {}

    def text_style(token_type) -> TextStyle:
        cached = style_cache.get(token_type)
        if cached is None:
            token_style = style.style_for_token(token_type)
            cached = TextStyle(
                fg=parse_hex_color(token_style.get("color")),
                bold=bool(token_style.get("bold")),
                italic=bool(token_style.get("italic")),
                underline=bool(token_style.get("underline")),
            )
            style_cache[token_type] = cached
        return cached

    lines: list[PreviewLine] = []
    current: list[StyledSegment] = []
    for token_type, value in lexer_for(path, text).get_tokens(text):
        parts = value.split("\n")
        for idx, part in enumerate(parts):
            if idx > 0:
                lines.append(PreviewLine(line_number=len(lines) + 1, segments=tuple(current)))
                current = []
            if part:
                current.append(StyledSegment(text_style(token_type), part))
    if current:
        lines.append(PreviewLine(line_number=len(lines) + 1, segments=tuple(current)))
    return lines


def plain_lines(text: str) -> list[PreviewLine]:
    rows = text.split("\n")
    if rows and rows[-1] == "":
        rows.pop()
    return [
        PreviewLine(line_number=idx + 1, segments=(StyledSegment(PLAIN_STYLE, line),) if line else ())
        for idx, line in enumerate(rows)
    ]


def render_preview(
    path: Path,
    style_name: str = DEFAULT_STYLE,
    max_lines: int = DEFAULT_MAX_LINES,
    no_color: bool = False,
) -> list[PreviewLine]:
    """Produce at most ``max_lines`` preview lines for ``path``.

    Never raises for filesystem problems: the failure becomes the preview.
    """
    if path.is_dir():
        return [message_line(DIRECTORY_SENTINEL)]
    try:
        data = _read_limited(path, max_lines)
    except OSError as exc:
        logger.debug("preview read failed for %s: %s", path, exc)
        return [message_line(f"Error reading file: {exc.strerror or exc}")]
    if isinstance(data, str):
        return [message_line(data)]

    text = decode_text(data).replace("\r\n", "\n").replace("\r", "\\x0d")
    text = sanitize_terminal_text(text)
    kept = text.split("\n")[:max_lines]
    text = "\n".join(kept)
    if no_color:
        return plain_lines(text)[:max_lines]
    return highlight_text(text, path, style_name)[:max_lines]
