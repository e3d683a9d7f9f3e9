"""Leading-character jump navigation over a listing, with repeat memory."""

from __future__ import annotations

from collections.abc import Sequence


def jump_index(names: Sequence[str], from_index: int, char: str, forward: bool = True) -> int | None:
    """Return the next index whose name starts with ``char`` (case-folded).

    Scanning starts just after (or before) ``from_index`` and wraps around the
    whole list once, so the starting entry itself is considered last.
    """
    count = len(names)
    if count == 0 or not char:
        return None
    target = char.casefold()
    step = 1 if forward else -1
    for offset in range(1, count + 1):
        idx = (from_index + step * offset) % count
        if names[idx].casefold().startswith(target):
            return idx
    return None


class JumpNavigator:
    """Remembers the last jump character so ``;``/``,`` can repeat it."""

    def __init__(self) -> None:
        self.last_char: str | None = None

    def remember(self, char: str) -> None:
        self.last_char = char

    def clear(self) -> None:
        self.last_char = None

    def jump(self, names: Sequence[str], from_index: int, char: str, forward: bool = True) -> int | None:
        self.remember(char)
        return jump_index(names, from_index, char, forward)

    def repeat(self, names: Sequence[str], from_index: int, forward: bool = True) -> int | None:
        if self.last_char is None:
            return None
        return jump_index(names, from_index, self.last_char, forward)
