"""Modal session controller.

Owns the directory model, the single search slot, the preview buffer and the
jump memory, and is the only writer of session state. Each mode routes input
only to its own operations; mode-scoped data is dropped whenever the session
leaves that mode. The render layer reads ``snapshot()`` once per tick.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..config import AppConfig
from ..file_browser import Entry, FileBrowser
from ..jump import JumpNavigator
from ..preview import PreviewBuffer, PreviewLine, render_preview
from ..search import (
    QueryTooLongError,
    SearchCoordinator,
    SearchFailed,
    SearchHandle,
    SearchPending,
    SearchQuery,
    SearchResult,
    parse_query,
)
from .commands import SEARCH_MODES, Command, InputEvent, Mode

logger = logging.getLogger(__name__)

SEARCH_RESULT_CAP = 100
SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of everything one rendered frame needs."""

    mode: Mode
    current_dir: Path
    entries: tuple[Entry, ...]
    selected_index: int
    show_hidden: bool
    search_input: str
    search_dirs_only: bool
    search_base: Path
    search_results: tuple[SearchResult, ...]
    search_selected: int
    spinner: str
    preview_title: str
    preview_lines: tuple[PreviewLine, ...]
    preview_position: str
    status_message: str
    last_jump_char: str | None

    @property
    def selected_entry(self) -> Entry | None:
        if 0 <= self.selected_index < len(self.entries):
            return self.entries[self.selected_index]
        return None


class SessionController:
    """State machine behind one interactive browsing session."""

    def __init__(
        self,
        start_path: Path,
        config: AppConfig | None = None,
        *,
        coordinator: SearchCoordinator | None = None,
        load_preview: Callable[[Path], list[PreviewLine]] | None = None,
        open_editor: Callable[[Path], str | None] | None = None,
        copy_to_clipboard: Callable[[str], bool] | None = None,
        result_cap: int = SEARCH_RESULT_CAP,
    ) -> None:
        self.config = config or AppConfig()
        self.browser = FileBrowser(start_path, self.config.show_hidden)
        self.base_dir = self.browser.current_dir
        self.coordinator = coordinator or SearchCoordinator()
        self._load_preview = load_preview or self._default_preview_loader
        self._open_editor = open_editor
        self._copy_to_clipboard = copy_to_clipboard
        self.result_cap = result_cap

        self.mode = Mode.NORMAL
        self.should_quit = False
        self.status_message = ""
        self.viewport_height = 20
        self._redraw_requested = False
        self.jumper = JumpNavigator()

        self.search_input = ""
        self.search_dirs_only = False
        self.search_query: SearchQuery | None = None
        self.search_handle: SearchHandle | None = None
        self.search_results: list[SearchResult] = []
        self.search_selected = 0
        self.spinner_frame = 0

        self.preview: PreviewBuffer | None = None
        self.preview_path: Path | None = None

    def _default_preview_loader(self, path: Path) -> list[PreviewLine]:
        return render_preview(path, self.config.theme, self.config.preview_max_lines)

    # -- mode bookkeeping -------------------------------------------------

    def _set_mode(self, mode: Mode) -> None:
        """Switch modes, dropping data owned by the mode being left."""
        previous = self.mode
        if previous is mode:
            return
        if previous in SEARCH_MODES and mode not in SEARCH_MODES:
            self._reset_search()
        if previous is Mode.PREVIEW:
            self.preview = None
            self.preview_path = None
        if mode not in (Mode.NORMAL, Mode.JUMP_INPUT):
            self.jumper.clear()
        self.mode = mode

    def _reset_search(self) -> None:
        if self.search_handle is not None:
            self.coordinator.cancel(self.search_handle)
        self.search_handle = None
        self.search_input = ""
        self.search_dirs_only = False
        self.search_query = None
        self.search_results = []
        self.search_selected = 0
        self.spinner_frame = 0

    def set_status(self, message: str) -> None:
        self.status_message = message

    def set_viewport_height(self, height: int) -> None:
        self.viewport_height = max(1, height)
        if self.preview is not None:
            self.preview.set_viewport_height(self.viewport_height)

    def consume_redraw_request(self) -> bool:
        """Return and clear whether the screen needs a full repaint."""
        requested = self._redraw_requested
        self._redraw_requested = False
        return requested

    def quit(self) -> None:
        if self.search_handle is not None:
            self.coordinator.cancel(self.search_handle)
            self.search_handle = None
        self.should_quit = True

    # -- dispatch ---------------------------------------------------------

    def dispatch(self, event: InputEvent) -> None:
        """Route one input event to the handler of the current mode.

        The transient status line is cleared first; quit is honored in
        every mode.
        """
        self.status_message = ""
        if event.command is Command.QUIT:
            self.quit()
            return
        handler = self._handlers[self.mode]
        handler(self, event)

    def _handle_normal(self, event: InputEvent) -> None:
        command = event.command
        browser = self.browser
        if command is Command.MOVE_UP:
            browser.move_up()
            self.jumper.clear()
        elif command is Command.MOVE_DOWN:
            browser.move_down()
            self.jumper.clear()
        elif command is Command.GO_TOP:
            browser.go_to_top()
            self.jumper.clear()
        elif command is Command.GO_BOTTOM:
            browser.go_to_bottom()
            self.jumper.clear()
        elif command is Command.OPEN:
            self.open_selected()
        elif command is Command.PARENT:
            if browser.go_parent():
                self.jumper.clear()
        elif command is Command.BEGIN_SEARCH:
            self.begin_search(dirs_only=False)
        elif command is Command.BEGIN_DIR_SEARCH:
            self.begin_search(dirs_only=True)
        elif command is Command.TOGGLE_HIDDEN:
            browser.toggle_hidden()
            self.jumper.clear()
        elif command is Command.RELOAD:
            browser.refresh()
            self.set_status("Reloaded")
        elif command is Command.COPY_PATH:
            self.copy_selected_path()
        elif command is Command.EDIT:
            entry = browser.selected_entry()
            if entry is not None and not entry.is_dir:
                self.edit(entry.path)
        elif command is Command.BEGIN_JUMP:
            self._set_mode(Mode.JUMP_INPUT)
        elif command is Command.JUMP_NEXT:
            self.repeat_jump(forward=True)
        elif command is Command.JUMP_PREV:
            self.repeat_jump(forward=False)
        elif command is Command.HELP:
            self._set_mode(Mode.HELP)

    def _handle_search_input(self, event: InputEvent) -> None:
        command = event.command
        if command is Command.CHAR and event.char:
            self.search_input += event.char
        elif command is Command.BACKSPACE:
            self.search_input = self.search_input[:-1]
        elif command is Command.SUBMIT:
            self.submit_search()
        elif command is Command.CANCEL:
            self._set_mode(Mode.NORMAL)

    def _handle_searching(self, event: InputEvent) -> None:
        if event.command is Command.CANCEL:
            self._set_mode(Mode.NORMAL)

    def _handle_search_result(self, event: InputEvent) -> None:
        command = event.command
        if command is Command.MOVE_UP:
            self._move_search_selection(-1)
        elif command is Command.MOVE_DOWN:
            self._move_search_selection(1)
        elif command is Command.CONFIRM:
            self.confirm_search_result()
        elif command is Command.RESEARCH:
            self.search_input = ""
            self.search_results = []
            self.search_selected = 0
            self.search_query = None
            self._set_mode(Mode.SEARCH_INPUT)
        elif command is Command.CANCEL:
            self._set_mode(Mode.NORMAL)

    def _handle_preview(self, event: InputEvent) -> None:
        command = event.command
        preview = self.preview
        if command is Command.CANCEL:
            self._set_mode(Mode.NORMAL)
            return
        if command is Command.EDIT:
            if self.preview_path is not None:
                self.edit(self.preview_path)
            return
        if preview is None:
            return
        if command is Command.SCROLL_DOWN:
            preview.scroll_down(1)
        elif command is Command.SCROLL_UP:
            preview.scroll_up(1)
        elif command is Command.HALF_PAGE_DOWN:
            preview.scroll_down(preview.half_page())
        elif command is Command.HALF_PAGE_UP:
            preview.scroll_up(preview.half_page())
        elif command is Command.PAGE_DOWN:
            preview.scroll_down(preview.full_page())
        elif command is Command.PAGE_UP:
            preview.scroll_up(preview.full_page())
        elif command is Command.SCROLL_TOP:
            preview.scroll_to_top()
        elif command is Command.SCROLL_BOTTOM:
            preview.scroll_to_bottom()

    def _handle_jump_input(self, event: InputEvent) -> None:
        if event.command is Command.CHAR and event.char:
            names = [entry.name for entry in self.browser.entries]
            target = self.jumper.jump(names, self.browser.selected_index, event.char, forward=True)
            if target is not None:
                self.browser.select_index(target)
        self._set_mode(Mode.NORMAL)

    def _handle_help(self, event: InputEvent) -> None:
        if event.command in (Command.HELP, Command.CANCEL):
            self._set_mode(Mode.NORMAL)

    _handlers: dict[Mode, Callable[[SessionController, InputEvent], None]] = {
        Mode.NORMAL: _handle_normal,
        Mode.SEARCH_INPUT: _handle_search_input,
        Mode.SEARCHING: _handle_searching,
        Mode.SEARCH_RESULT: _handle_search_result,
        Mode.PREVIEW: _handle_preview,
        Mode.JUMP_INPUT: _handle_jump_input,
        Mode.HELP: _handle_help,
    }

    # -- browsing ---------------------------------------------------------

    def open_selected(self) -> None:
        """Enter the selected directory, or preview the selected file."""
        entry = self.browser.selected_entry()
        if entry is None:
            return
        if entry.is_dir:
            if self.browser.enter_selected():
                self.jumper.clear()
            return
        self.open_preview(entry.path)

    def open_preview(self, path: Path) -> None:
        self._set_mode(Mode.PREVIEW)
        self.preview_path = path
        self.preview = PreviewBuffer.build(self._load_preview(path), self.viewport_height)

    def repeat_jump(self, forward: bool) -> None:
        names = [entry.name for entry in self.browser.entries]
        target = self.jumper.repeat(names, self.browser.selected_index, forward=forward)
        if target is not None:
            self.browser.select_index(target)

    def copy_selected_path(self) -> None:
        entry = self.browser.selected_entry()
        if entry is None or self._copy_to_clipboard is None:
            return
        text = str(entry.path)
        if self._copy_to_clipboard(text):
            self.set_status(f"Copied: {text}")
        else:
            self.set_status("Failed to copy path to clipboard")

    def edit(self, path: Path) -> None:
        if self._open_editor is None:
            self.set_status("No editor available")
            return
        error = self._open_editor(path)
        self._redraw_requested = True
        if error:
            self.set_status(error)
            return
        if self.mode is Mode.PREVIEW and self.preview_path == path:
            offset = self.preview.scroll_offset if self.preview is not None else 0
            self.preview = PreviewBuffer.build(self._load_preview(path), self.viewport_height)
            self.preview.scroll_down(offset)
        self.browser.refresh()

    # -- search -----------------------------------------------------------

    def begin_search(self, dirs_only: bool) -> None:
        self._set_mode(Mode.SEARCH_INPUT)
        self.search_input = ""
        self.search_results = []
        self.search_selected = 0
        self.search_query = None
        self.search_dirs_only = dirs_only

    def search_base_for(self, query: SearchQuery | None) -> Path:
        if query is not None and query.base_path is not None:
            return query.base_path
        return self.base_dir

    def submit_search(self) -> None:
        """Parse the typed input and hand it to the coordinator.

        Empty query text cancels silently back to ``NORMAL``.
        """
        query = parse_query(self.search_input, default_dirs_only=self.search_dirs_only)
        if query.is_empty:
            self._set_mode(Mode.NORMAL)
            return
        base = self.search_base_for(query)
        if not base.is_dir():
            self._set_mode(Mode.NORMAL)
            self.set_status(f"Base directory not found: {base}")
            return
        try:
            handle = self.coordinator.start(base, query, self.result_cap)
        except QueryTooLongError as exc:
            self._set_mode(Mode.NORMAL)
            self.set_status(str(exc))
            return
        logger.debug("search %d started: %r under %s", handle.handle_id, query.text, base)
        self.search_query = query
        self.search_dirs_only = query.dirs_only
        self.search_handle = handle
        self.spinner_frame = 0
        self._set_mode(Mode.SEARCHING)

    def tick(self) -> bool:
        """Poll the in-flight search; returns whether visible state changed."""
        if self.mode is not Mode.SEARCHING or self.search_handle is None:
            return False
        outcome = self.coordinator.poll(self.search_handle)
        if isinstance(outcome, SearchPending):
            self.spinner_frame = (self.spinner_frame + 1) % len(SPINNER_FRAMES)
            return True
        self.search_handle = None
        if isinstance(outcome, SearchFailed):
            self._set_mode(Mode.NORMAL)
            self.set_status(outcome.message)
            return True
        if not outcome.results:
            self._set_mode(Mode.NORMAL)
            self.set_status("No results found")
            return True
        self.search_results = list(outcome.results)
        self.search_selected = 0
        self._set_mode(Mode.SEARCH_RESULT)
        return True

    def _move_search_selection(self, delta: int) -> None:
        if not self.search_results:
            return
        self.search_selected = (self.search_selected + delta) % len(self.search_results)

    def confirm_search_result(self) -> None:
        """Jump the browser to the selected result.

        Directories become the new listing root; files re-root at their
        parent, select themselves when listed, and open in preview.
        """
        if not 0 <= self.search_selected < len(self.search_results):
            self._set_mode(Mode.NORMAL)
            return
        result = self.search_results[self.search_selected]
        show_hidden = self.browser.show_hidden
        if result.is_dir:
            self._set_mode(Mode.NORMAL)
            self.browser = FileBrowser(result.path, show_hidden)
            return
        self.browser = FileBrowser(result.path.parent, show_hidden)
        self.browser.select_name(result.path.name)
        self.open_preview(result.path)

    # -- rendering --------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        preview = self.preview
        if preview is not None:
            preview.set_viewport_height(self.viewport_height)
        return SessionSnapshot(
            mode=self.mode,
            current_dir=self.browser.current_dir,
            entries=tuple(self.browser.entries),
            selected_index=self.browser.selected_index,
            show_hidden=self.browser.show_hidden,
            search_input=self.search_input,
            search_dirs_only=self.search_dirs_only,
            search_base=self.search_base_for(self.search_query),
            search_results=tuple(self.search_results),
            search_selected=self.search_selected,
            spinner=SPINNER_FRAMES[self.spinner_frame % len(SPINNER_FRAMES)],
            preview_title=self.preview_path.name if self.preview_path is not None else "",
            preview_lines=preview.visible_slice() if preview is not None else (),
            preview_position=preview.position_label() if preview is not None else "",
            status_message=self.status_message,
            last_jump_char=self.jumper.last_char,
        )
