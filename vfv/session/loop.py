"""Main interactive event loop for the terminal UI.

Each iteration redraws when something changed, waits briefly for a key,
dispatches it, and polls the in-flight search. Feature logic lives in the
controller; this loop is only wiring.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..render import content_rows, render_frame, write_frame
from ..ui_theme import UITheme
from .controller import SessionController
from .keymap import map_key


@dataclass(frozen=True)
class LoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 100


def _terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return max(1, size.columns), max(1, size.lines)


def run_session_loop(
    controller: SessionController,
    stdin_fd: int,
    theme: UITheme,
    *,
    timing: LoopTiming | None = None,
    read_key_fn: Callable[[int, int | None], str] = read_key,
    write_fn: Callable[[str], None] = write_frame,
    terminal_size: Callable[[], tuple[int, int]] = _terminal_size,
) -> None:
    """Run until the controller asks to quit.

    ``read_key_fn``, ``write_fn`` and ``terminal_size`` are injectable so the
    loop can be driven without a real terminal.
    """
    timing = timing or LoopTiming()
    last_size: tuple[int, int] | None = None
    dirty = True

    while not controller.should_quit:
        width, height = terminal_size()
        if (width, height) != last_size:
            last_size = (width, height)
            # Full clear on resize; regular frames only home the cursor.
            write_fn("\033[H\033[J")
            dirty = True
        controller.set_viewport_height(content_rows(height))

        if dirty:
            write_fn(render_frame(controller.snapshot(), width, height, theme))
            dirty = False

        key = read_key_fn(stdin_fd, timing.key_timeout_ms)
        event = map_key(controller.mode, key)
        if event is not None:
            controller.dispatch(event)
            dirty = True
            # Editor runs leave the screen in an unknown state.
            last_size = None if controller.consume_redraw_request() else last_size

        if controller.tick():
            dirty = True
