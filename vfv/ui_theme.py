"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (header, listing, footer, help). Syntax
highlighting colors come from the Pygments style instead.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    selected: str
    header_path: str
    header_search: str
    title_browser: str
    title_search: str
    title_preview: str
    title_help: str
    entry_dir: str
    entry_file: str
    gutter: str
    dim: str
    footer_normal: str
    footer_search: str
    footer_jump: str
    footer_preview: str
    status: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    selected="\033[1;97;44m",
    header_path="\033[1;36m",
    header_search="\033[1;33m",
    title_browser="\033[36m",
    title_search="\033[33m",
    title_preview="\033[36m",
    title_help="\033[32m",
    entry_dir="\033[33m",
    entry_file="\033[97m",
    gutter="\033[90m",
    dim="\033[90m",
    footer_normal="\033[90m",
    footer_search="\033[33m",
    footer_jump="\033[32m",
    footer_preview="\033[36m",
    status="\033[1;38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    selected="\033[1;38;5;231;48;5;24m",
    header_path="\033[1;38;5;45m",
    header_search="\033[1;38;5;153m",
    title_browser="\033[38;5;39m",
    title_search="\033[38;5;153m",
    title_preview="\033[38;5;39m",
    title_help="\033[38;5;84m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    gutter="\033[38;5;31m",
    dim="\033[2;38;5;110m",
    footer_normal="\033[2;38;5;110m",
    footer_search="\033[38;5;153m",
    footer_jump="\033[38;5;84m",
    footer_preview="\033[38;5;45m",
    status="\033[1;38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    selected="\033[7m",
    header_path="",
    header_search="",
    title_browser="",
    title_search="",
    title_preview="",
    title_help="",
    entry_dir="",
    entry_file="",
    gutter="",
    dim="",
    footer_normal="",
    footer_search="",
    footer_jump="",
    footer_preview="",
    status="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode.

    Unknown names fall back to the default palette.
    """
    if no_color:
        return PLAIN_THEME
    candidate = (name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)
