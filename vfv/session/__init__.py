"""Interactive session: modes, key mapping, state machine and event loop."""

from __future__ import annotations

from .commands import SEARCH_MODES, Command, InputEvent, Mode
from .controller import SEARCH_RESULT_CAP, SessionController, SessionSnapshot
from .keymap import map_key


def run_session(*args, **kwargs):
    """Lazily import the session bootstrap to avoid renderer import cycles."""
    from .app import run_session as _run_session

    return _run_session(*args, **kwargs)


__all__ = [
    "Command",
    "InputEvent",
    "Mode",
    "SEARCH_MODES",
    "SEARCH_RESULT_CAP",
    "SessionController",
    "SessionSnapshot",
    "map_key",
    "run_session",
]
