"""Translate decoded key tokens into abstract commands for the current mode."""

from __future__ import annotations

from .commands import Command, InputEvent, Mode

ENTER_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})

NORMAL_KEYS: dict[str, Command] = {
    "q": Command.QUIT,
    "j": Command.MOVE_DOWN,
    "DOWN": Command.MOVE_DOWN,
    "k": Command.MOVE_UP,
    "UP": Command.MOVE_UP,
    "l": Command.OPEN,
    "RIGHT": Command.OPEN,
    "ENTER_CR": Command.OPEN,
    "ENTER_LF": Command.OPEN,
    "h": Command.PARENT,
    "LEFT": Command.PARENT,
    "BACKSPACE": Command.PARENT,
    "g": Command.GO_TOP,
    "G": Command.GO_BOTTOM,
    "e": Command.EDIT,
    "/": Command.BEGIN_SEARCH,
    "D": Command.BEGIN_DIR_SEARCH,
    ".": Command.TOGGLE_HIDDEN,
    "r": Command.RELOAD,
    "y": Command.COPY_PATH,
    "f": Command.BEGIN_JUMP,
    ";": Command.JUMP_NEXT,
    ",": Command.JUMP_PREV,
    "?": Command.HELP,
}

PREVIEW_KEYS: dict[str, Command] = {
    "q": Command.CANCEL,
    "ESC": Command.CANCEL,
    "h": Command.CANCEL,
    "LEFT": Command.CANCEL,
    "j": Command.SCROLL_DOWN,
    "DOWN": Command.SCROLL_DOWN,
    "k": Command.SCROLL_UP,
    "UP": Command.SCROLL_UP,
    "CTRL_D": Command.HALF_PAGE_DOWN,
    "CTRL_U": Command.HALF_PAGE_UP,
    "CTRL_F": Command.PAGE_DOWN,
    "PAGE_DOWN": Command.PAGE_DOWN,
    " ": Command.PAGE_DOWN,
    "CTRL_B": Command.PAGE_UP,
    "PAGE_UP": Command.PAGE_UP,
    "g": Command.SCROLL_TOP,
    "G": Command.SCROLL_BOTTOM,
    "e": Command.EDIT,
}

SEARCH_RESULT_KEYS: dict[str, Command] = {
    "ENTER_CR": Command.CONFIRM,
    "ENTER_LF": Command.CONFIRM,
    "ESC": Command.CANCEL,
    "q": Command.CANCEL,
    "UP": Command.MOVE_UP,
    "k": Command.MOVE_UP,
    "SHIFT_TAB": Command.MOVE_UP,
    "DOWN": Command.MOVE_DOWN,
    "j": Command.MOVE_DOWN,
    "TAB": Command.MOVE_DOWN,
    "/": Command.RESEARCH,
}

HELP_KEYS: dict[str, Command] = {
    "ESC": Command.CANCEL,
    "q": Command.CANCEL,
    "?": Command.HELP,
}


def is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def map_key(mode: Mode, key: str) -> InputEvent | None:
    """Return the event ``key`` means in ``mode``, or ``None`` to ignore it."""
    if not key:
        return None
    if key == "CTRL_C":
        return InputEvent(Command.QUIT)

    if mode is Mode.NORMAL:
        command = NORMAL_KEYS.get(key)
    elif mode is Mode.PREVIEW:
        command = PREVIEW_KEYS.get(key)
    elif mode is Mode.SEARCH_RESULT:
        command = SEARCH_RESULT_KEYS.get(key)
    elif mode is Mode.HELP:
        command = HELP_KEYS.get(key)
    elif mode is Mode.SEARCHING:
        command = Command.CANCEL if key == "ESC" else None
    elif mode is Mode.SEARCH_INPUT:
        if key in ENTER_KEYS:
            command = Command.SUBMIT
        elif key == "ESC":
            command = Command.CANCEL
        elif key == "BACKSPACE":
            command = Command.BACKSPACE
        elif is_text_key(key):
            return InputEvent(Command.CHAR, key)
        else:
            command = None
    elif mode is Mode.JUMP_INPUT:
        if is_text_key(key):
            return InputEvent(Command.CHAR, key)
        # Anything else abandons the pending jump.
        command = Command.CANCEL
    else:
        command = None

    return InputEvent(command) if command is not None else None
