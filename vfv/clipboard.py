"""Best-effort system clipboard access."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)

CLIPBOARD_TIMEOUT_SECONDS = 2.0


def clipboard_commands() -> list[list[str]]:
    """Return clipboard writer argvs to try, in preference order, for this platform."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> bool:
    """Pipe ``text`` into the first available clipboard tool; ``True`` on success."""
    if not text:
        return False

    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                check=False,
                timeout=CLIPBOARD_TIMEOUT_SECONDS,
            )
        except subprocess.TimeoutExpired:
            logger.debug("clipboard command %s timed out", command[0])
            continue
        except OSError as exc:
            logger.debug("clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return True
        logger.debug("clipboard command %s exited with %d", command[0], proc.returncode)
    return False
