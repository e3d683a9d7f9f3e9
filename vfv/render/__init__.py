"""Frame renderer for the session view.

Builds one full ANSI frame from a ``SessionSnapshot``: a header row, a titled
main area whose content depends on the mode, and a footer row. Rendering
never mutates session state.
"""

from __future__ import annotations

import os
import sys

from ..ansi import fit_ansi_line
from ..file_browser import Entry
from ..preview.types import PreviewLine, TextStyle
from ..search import SearchResult
from ..session.commands import Mode
from ..session.controller import SessionSnapshot
from ..ui_theme import PLAIN_THEME, UITheme
from .help import HELP_LINES, SEARCH_USAGE_LINES, footer_hint

HEADER_ROWS = 1
TITLE_ROWS = 1
FOOTER_ROWS = 1
LINE_NUMBER_WIDTH = 4


def content_rows(term_lines: int) -> int:
    """Rows available below the main-area title (the preview viewport height)."""
    return max(1, term_lines - HEADER_ROWS - TITLE_ROWS - FOOTER_ROWS)


def style_to_sgr(style: TextStyle) -> str:
    codes: list[str] = []
    if style.bold:
        codes.append("1")
    if style.italic:
        codes.append("3")
    if style.underline:
        codes.append("4")
    if style.fg is not None:
        red, green, blue = style.fg
        codes.append(f"38;2;{red};{green};{blue}")
    if not codes:
        return ""
    return f"\033[{';'.join(codes)}m"


def format_preview_line(line: PreviewLine, theme: UITheme) -> str:
    colored = theme is not PLAIN_THEME
    out: list[str] = []
    if line.line_number > 0:
        out.append(f"{theme.gutter}{line.line_number:{LINE_NUMBER_WIDTH}} {theme.reset}")
    for segment in line.segments:
        sgr = style_to_sgr(segment.style) if colored else ""
        if sgr:
            out.append(f"{sgr}{segment.text}\033[0m")
        else:
            out.append(segment.text)
    return "".join(out)


def window_start(selected: int, total: int, rows: int) -> int:
    """First visible row of a list so that ``selected`` stays on screen."""
    if total <= rows:
        return 0
    start = selected - rows // 2
    return max(0, min(start, total - rows))


def _list_row(label: str, is_dir: bool, is_selected: bool, theme: UITheme) -> str:
    if is_selected:
        return f"{theme.selected}{label}"
    color = theme.entry_dir if is_dir else theme.entry_file
    return f"{color}{label}{theme.reset}" if color else label


def entry_label(entry: Entry) -> str:
    return f" {entry.name}/" if entry.is_dir else f" {entry.name}"


def result_label(result: SearchResult) -> str:
    return f" {result.display_path}/" if result.is_dir else f" {result.display_path}"


def _header(snapshot: SessionSnapshot, theme: UITheme) -> str:
    mode = snapshot.mode
    if mode in (Mode.SEARCH_INPUT, Mode.SEARCH_RESULT):
        cursor = "_" if mode is Mode.SEARCH_INPUT else ""
        return f"{theme.header_search}/{snapshot.search_input}{cursor}{theme.reset}"
    if mode is Mode.SEARCHING:
        return f"{theme.header_search}{snapshot.spinner} /{snapshot.search_input}{theme.reset}"
    hidden = "  [hidden shown]" if snapshot.show_hidden else ""
    return f"{theme.header_path}{snapshot.current_dir}{hidden}{theme.reset}"


def _browser_body(snapshot: SessionSnapshot, rows: int, theme: UITheme) -> tuple[str, list[str]]:
    total = len(snapshot.entries)
    if total:
        title = f"Files [{snapshot.selected_index + 1}/{total}]"
    else:
        title = "Files [empty]"
    if snapshot.mode is Mode.JUMP_INPUT:
        title += "  jump to: _"
    start = window_start(snapshot.selected_index, total, rows)
    body = [
        _list_row(entry_label(entry), entry.is_dir, idx == snapshot.selected_index, theme)
        for idx, entry in enumerate(snapshot.entries[start : start + rows], start=start)
    ]
    return f"{theme.title_browser}{title}{theme.reset}", body


def _search_input_body(theme: UITheme) -> tuple[str, list[str]]:
    body = [f"{label}{theme.dim}{detail}{theme.reset}" if detail else label for label, detail in SEARCH_USAGE_LINES]
    return f"{theme.title_search}Search (Enter to search){theme.reset}", body


def _searching_body(snapshot: SessionSnapshot, theme: UITheme) -> tuple[str, list[str]]:
    kind = "folders" if snapshot.search_dirs_only else "files"
    title = f"{snapshot.spinner} Searching: {snapshot.search_input}"
    body = [f"{theme.dim}Searching {kind} in {snapshot.search_base}...{theme.reset}"]
    return f"{theme.title_search}{title}{theme.reset}", body


def _search_result_body(snapshot: SessionSnapshot, rows: int, theme: UITheme) -> tuple[str, list[str]]:
    results = snapshot.search_results
    scope = "Folders" if snapshot.search_dirs_only else "All"
    title = f"{scope}: {snapshot.search_input} ({len(results)} results)"
    start = window_start(snapshot.search_selected, len(results), rows)
    body = [
        _list_row(result_label(result), result.is_dir, idx == snapshot.search_selected, theme)
        for idx, result in enumerate(results[start : start + rows], start=start)
    ]
    return f"{theme.title_search}{title}{theme.reset}", body


def _preview_body(snapshot: SessionSnapshot, theme: UITheme) -> tuple[str, list[str]]:
    title = f"{snapshot.preview_title or 'Preview'} {snapshot.preview_position}".rstrip()
    body = [format_preview_line(line, theme) for line in snapshot.preview_lines]
    return f"{theme.title_preview}{title}{theme.reset}", body


def _help_body(theme: UITheme) -> tuple[str, list[str]]:
    return f"{theme.title_help}Help{theme.reset}", list(HELP_LINES)


def _footer(snapshot: SessionSnapshot, theme: UITheme) -> str:
    if snapshot.status_message:
        return f"{theme.status}{snapshot.status_message}{theme.reset}"
    entry = snapshot.selected_entry
    hint = footer_hint(snapshot.mode, entry is not None and not entry.is_dir, snapshot.last_jump_char)
    color = {
        Mode.SEARCH_INPUT: theme.footer_search,
        Mode.SEARCHING: theme.footer_search,
        Mode.SEARCH_RESULT: theme.footer_search,
        Mode.JUMP_INPUT: theme.footer_jump,
        Mode.HELP: theme.footer_jump,
        Mode.PREVIEW: theme.footer_preview,
    }.get(snapshot.mode, theme.footer_normal)
    return f"{color}{hint}{theme.reset}"


def render_frame_lines(snapshot: SessionSnapshot, width: int, height: int, theme: UITheme) -> list[str]:
    """Return exactly ``height`` rows, each padded or clipped to ``width`` columns."""
    width = max(1, width)
    rows = content_rows(height)
    mode = snapshot.mode
    if mode is Mode.PREVIEW:
        title, body = _preview_body(snapshot, theme)
    elif mode is Mode.SEARCH_INPUT:
        title, body = _search_input_body(theme)
    elif mode is Mode.SEARCHING:
        title, body = _searching_body(snapshot, theme)
    elif mode is Mode.SEARCH_RESULT:
        title, body = _search_result_body(snapshot, rows, theme)
    elif mode is Mode.HELP:
        title, body = _help_body(theme)
    else:
        title, body = _browser_body(snapshot, rows, theme)

    body = body[:rows] + [""] * max(0, rows - len(body))
    lines = [_header(snapshot, theme), title, *body, _footer(snapshot, theme)]
    return [fit_ansi_line(line, width) for line in lines[: max(1, height)]]


def render_frame(snapshot: SessionSnapshot, width: int, height: int, theme: UITheme) -> str:
    return "\033[H" + "\r\n".join(render_frame_lines(snapshot, width, height, theme))


def write_frame(frame: str, fd: int | None = None) -> None:
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, frame.encode("utf-8", errors="replace"))

