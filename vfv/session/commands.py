"""Session modes and the abstract commands dispatched to the controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    NORMAL = "normal"
    SEARCH_INPUT = "search_input"
    SEARCHING = "searching"
    SEARCH_RESULT = "search_result"
    PREVIEW = "preview"
    JUMP_INPUT = "jump_input"
    HELP = "help"


SEARCH_MODES = frozenset({Mode.SEARCH_INPUT, Mode.SEARCHING, Mode.SEARCH_RESULT})


class Command(Enum):
    QUIT = "quit"
    CANCEL = "cancel"
    CHAR = "char"
    BACKSPACE = "backspace"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    GO_TOP = "go_top"
    GO_BOTTOM = "go_bottom"
    OPEN = "open"
    PARENT = "parent"
    BEGIN_SEARCH = "begin_search"
    BEGIN_DIR_SEARCH = "begin_dir_search"
    SUBMIT = "submit"
    CONFIRM = "confirm"
    RESEARCH = "research"
    TOGGLE_HIDDEN = "toggle_hidden"
    RELOAD = "reload"
    COPY_PATH = "copy_path"
    EDIT = "edit"
    BEGIN_JUMP = "begin_jump"
    JUMP_NEXT = "jump_next"
    JUMP_PREV = "jump_prev"
    HELP = "help"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    HALF_PAGE_UP = "half_page_up"
    HALF_PAGE_DOWN = "half_page_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    SCROLL_TOP = "scroll_top"
    SCROLL_BOTTOM = "scroll_bottom"


@dataclass(frozen=True)
class InputEvent:
    """One abstract input; ``char`` is set only for ``Command.CHAR``."""

    command: Command
    char: str | None = None
