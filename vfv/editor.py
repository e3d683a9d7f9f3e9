"""Editor launch helper for opening the selected file.

Runs the configured editor (or ``$VISUAL``/``$EDITOR`` when none is
configured) while temporarily leaving raw/alternate-screen TUI mode. Returns
an error message string instead of raising so the session can show it in the
status line.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

EDITOR_ENV_VARS = ("VISUAL", "EDITOR")


def resolve_editor(editor: str) -> str:
    """Return the configured editor, else the first non-blank of ``$VISUAL``/``$EDITOR``."""
    if editor.strip():
        return editor
    for name in EDITOR_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


def editor_command(editor: str, editor_args: Sequence[str], target: Path) -> list[str] | None:
    """Build the argv for opening ``target``; ``None`` when no editor is configured."""
    try:
        base = shlex.split(resolve_editor(editor))
    except ValueError:
        return None
    if not base:
        return None
    return [*base, *editor_args, str(target)]


def launch_editor(
    target: Path,
    editor: str,
    editor_args: Sequence[str],
    suspend_tui: Callable[[], None],
    resume_tui: Callable[[], None],
) -> str | None:
    cmd = editor_command(editor, editor_args, target)
    if cmd is None:
        return "Cannot edit: no editor configured."

    suspend_tui()
    try:
        proc = subprocess.run(cmd, check=False)
    except OSError as exc:
        logger.warning("editor launch failed: %s", exc)
        return f"Failed to open editor '{cmd[0]}': {exc.strerror or exc}"
    finally:
        resume_tui()
    if proc.returncode != 0:
        return f"Editor exited with status {proc.returncode}"
    return None
