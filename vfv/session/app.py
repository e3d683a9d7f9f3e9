"""Interactive session bootstrap.

Wires config, terminal, search coordinator, preview loader, editor and
clipboard into a ``SessionController`` and runs the event loop inside raw
alternate-screen mode.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..clipboard import copy_text_to_clipboard
from ..config import AppConfig
from ..editor import launch_editor
from ..preview import PreviewLine, render_preview
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .controller import SessionController
from .loop import run_session_loop

logger = logging.getLogger(__name__)


class NotATerminalError(RuntimeError):
    """Raised when the interactive session is started without a TTY."""


def build_controller(
    start_path: Path,
    config: AppConfig,
    terminal: TerminalController,
    *,
    style: str | None = None,
    no_color: bool = False,
) -> SessionController:
    style_name = style or config.theme

    def load_preview(path: Path) -> list[PreviewLine]:
        return render_preview(path, style_name, config.preview_max_lines, no_color=no_color)

    def open_editor(path: Path) -> str | None:
        return launch_editor(
            path,
            config.editor,
            config.editor_args,
            suspend_tui=terminal.disable_tui_mode,
            resume_tui=terminal.enable_tui_mode,
        )

    return SessionController(
        start_path,
        config,
        load_preview=load_preview,
        open_editor=open_editor,
        copy_to_clipboard=copy_text_to_clipboard,
    )


def run_session(
    start_path: Path,
    config: AppConfig,
    *,
    style: str | None = None,
    ui_theme: str | None = None,
    no_color: bool = False,
) -> None:
    """Run the interactive browser rooted at ``start_path`` until the user quits."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise NotATerminalError("vfv needs an interactive terminal")

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    controller = build_controller(start_path, config, terminal, style=style, no_color=no_color)
    theme = resolve_theme(ui_theme or config.ui_theme, no_color=no_color or bool(os.environ.get("NO_COLOR")))
    logger.debug("session started in %s", controller.browser.current_dir)

    with terminal.raw_mode():
        run_session_loop(controller, stdin_fd, theme)
