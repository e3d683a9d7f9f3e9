"""Help overlay content, search usage text and per-mode footer hints.

Everything here is presentation-only text; styling is applied by the frame
renderer.
"""

from __future__ import annotations

from ..session.commands import Mode

HELP_LINES: tuple[str, ...] = (
    "",
    "  vfv - Vive File Viewer",
    "",
    "  === File Browser ===",
    "  j/k, Up/Down   Move up/down",
    "  Enter, l       Open file / Enter directory",
    "  h, Backspace   Go to parent directory",
    "  g/G            Go to top/bottom",
    "  e              Open in editor",
    "  y              Copy path to clipboard",
    "  f + char       Jump to entry starting with char",
    "  ;              Jump to next match",
    "  ,              Jump to previous match",
    "  /              Search all files (fuzzy)",
    "  D              Search folders only",
    "  .              Toggle hidden files",
    "  r              Reload",
    "  ?              Show this help",
    "  q, Ctrl+C      Quit",
    "",
    "  === Preview ===",
    "  j/k            Scroll up/down",
    "  Ctrl+D/U       Half page down/up",
    "  Ctrl+F/B       Page down/up",
    "  g/G            Go to top/bottom",
    "  e              Open in editor",
    "  h/q            Back to browser",
    "",
    "  Press q or ? to close",
)

SEARCH_USAGE_LINES: tuple[tuple[str, str], ...] = (
    ("", ""),
    ("  Usage: ", "<query> [options]"),
    ("", ""),
    ("  Options:", ""),
    ("    -d, --dir       ", "Directories only"),
    ("    -e, --exact     ", "Exact match (no fuzzy)"),
    ("    -b, --base DIR  ", "Search base directory"),
    ("", ""),
    ("  Examples:", ""),
    ("    main.py         ", "Fuzzy search for main.py"),
    ("    src/main -d     ", "Directories containing 'main' under 'src'"),
    ("    config -e       ", "Exact match for 'config'"),
    ("    main -b ~/dev   ", "Search 'main' under ~/dev"),
)


def footer_hint(mode: Mode, selected_is_file: bool, last_jump_char: str | None) -> str:
    """Return the key hint line shown when no status message is pending."""
    if mode is Mode.SEARCH_INPUT:
        return "Enter:search  Esc:cancel"
    if mode is Mode.SEARCHING:
        return "Searching...  Esc:cancel"
    if mode is Mode.SEARCH_RESULT:
        return "j/k:select  Enter:open  /:re-search  Esc:cancel"
    if mode is Mode.JUMP_INPUT:
        return "Type a character to jump..."
    if mode is Mode.PREVIEW:
        return "j/k:scroll  g/G:top/bottom  e:editor  h/q:back"
    if mode is Mode.HELP:
        return "Press q or ? to close"
    jump_hint = f"  ;/,:next/prev '{last_jump_char}'" if last_jump_char else ""
    if selected_is_file:
        return f"q:quit  j/k:move  f:jump{jump_hint}  Enter:open  e:editor  /:search  ?:help"
    return f"q:quit  j/k:move  f:jump{jump_hint}  Enter:open  /:search  ?:help"
