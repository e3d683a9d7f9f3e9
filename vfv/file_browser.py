"""Single-directory listing with selection tracking.

The browser re-lists its directory wholesale on every refresh instead of
diffing; entries are immutable and the selection index is clamped after each
listing so it always points at a valid entry (or 0 when empty).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One row of a directory listing."""

    name: str
    path: Path
    is_dir: bool


def entry_sort_key(entry: Entry) -> tuple[int, str, str]:
    """Directories first, then case-insensitive name order."""
    return (0 if entry.is_dir else 1, entry.name.casefold(), entry.name)


def list_directory(path: Path, show_hidden: bool) -> list[Entry]:
    """Return sorted entries of ``path``.

    Unreadable directories produce an empty list. Entries whose metadata
    cannot be read (dangling symlinks, races with deletion) are skipped.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(path) as it:
            for dirent in it:
                name = dirent.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = dirent.is_dir()
                    if not is_dir:
                        os.stat(dirent.path)
                except OSError:
                    continue
                entries.append(Entry(name=name, path=path / name, is_dir=is_dir))
    except OSError as exc:
        logger.debug("cannot list %s: %s", path, exc)
        return []
    entries.sort(key=entry_sort_key)
    return entries


def _canonical(path: Path) -> Path:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return path.absolute()


class FileBrowser:
    """Directory Model: one directory, its sorted entries, and a selection."""

    def __init__(self, path: Path, show_hidden: bool = False) -> None:
        self.current_dir = _canonical(Path(path))
        self.show_hidden = show_hidden
        self.entries: list[Entry] = []
        self.selected_index = 0
        self.refresh()

    def refresh(self) -> None:
        """Re-list ``current_dir`` and clamp the selection into range."""
        self.entries = list_directory(self.current_dir, self.show_hidden)
        if self.selected_index >= len(self.entries):
            self.selected_index = max(0, len(self.entries) - 1)

    def selected_entry(self) -> Entry | None:
        if 0 <= self.selected_index < len(self.entries):
            return self.entries[self.selected_index]
        return None

    def move_selection(self, delta: int) -> None:
        """Move the selection by ``delta`` rows, wrapping at both ends."""
        if not self.entries:
            return
        self.selected_index = (self.selected_index + delta) % len(self.entries)

    def move_up(self) -> None:
        self.move_selection(-1)

    def move_down(self) -> None:
        self.move_selection(1)

    def go_to_top(self) -> None:
        self.selected_index = 0

    def go_to_bottom(self) -> None:
        self.selected_index = max(0, len(self.entries) - 1)

    def select_index(self, index: int) -> None:
        if 0 <= index < len(self.entries):
            self.selected_index = index

    def select_name(self, name: str) -> bool:
        """Select the entry called ``name``; returns whether one was found."""
        for idx, entry in enumerate(self.entries):
            if entry.name == name:
                self.selected_index = idx
                return True
        return False

    def change_dir(self, path: Path) -> None:
        """Re-root the listing at ``path`` with the selection reset to 0."""
        self.current_dir = _canonical(Path(path))
        self.selected_index = 0
        self.refresh()

    def enter_selected(self) -> bool:
        """Descend into the selected directory; False when it is not one."""
        entry = self.selected_entry()
        if entry is None or not entry.is_dir:
            return False
        self.change_dir(entry.path)
        return True

    def go_parent(self) -> bool:
        """List the parent directory and re-select the directory just left.

        Returns False (and changes nothing) at the filesystem root.
        """
        parent = self.current_dir.parent
        if parent == self.current_dir:
            return False
        left_name = self.current_dir.name
        self.change_dir(parent)
        if not self.select_name(left_name):
            self.selected_index = 0
        return True

    def toggle_hidden(self) -> None:
        """Flip hidden-file visibility and re-list the same directory."""
        self.show_hidden = not self.show_hidden
        self.refresh()
