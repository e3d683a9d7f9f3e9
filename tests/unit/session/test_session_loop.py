"""Event loop wiring tests driven by scripted keys."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from vfv.config import AppConfig
from vfv.preview.types import message_line
from vfv.search import PENDING
from vfv.session import Mode, SessionController
from vfv.session.loop import LoopTiming, run_session_loop
from vfv.ui_theme import PLAIN_THEME


class _IdleCoordinator:
    def start(self, base_dir, query, result_cap):
        raise AssertionError("search should not start")

    def poll(self, handle):
        return PENDING

    def cancel(self, handle) -> None:
        pass


class ScriptedKeys:
    """Yields queued key tokens, then ``q`` forever."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)
        self.timeouts: list[int | None] = []

    def __call__(self, fd: int, timeout_ms: int | None = None) -> str:
        self.timeouts.append(timeout_ms)
        if self.keys:
            return self.keys.pop(0)
        return "q"


class RunSessionLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "a.txt").write_text("a\n", encoding="utf-8")
        (self.root / "b.txt").write_text("b\n", encoding="utf-8")
        self.controller = SessionController(
            self.root,
            AppConfig(),
            coordinator=_IdleCoordinator(),
            load_preview=lambda path: [message_line(path.name)],
        )
        self.frames: list[str] = []

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_keys(self, keys: list[str], size=(40, 10)) -> ScriptedKeys:
        reader = ScriptedKeys(keys)
        run_session_loop(
            self.controller,
            0,
            PLAIN_THEME,
            timing=LoopTiming(key_timeout_ms=7),
            read_key_fn=reader,
            write_fn=self.frames.append,
            terminal_size=lambda: size,
        )
        return reader

    def test_loop_dispatches_keys_until_quit(self) -> None:
        reader = self.run_keys(["j", "ENTER_CR"])

        self.assertTrue(self.controller.should_quit)
        self.assertEqual(reader.timeouts, [7, 7, 7, 7])
        # In preview "q" only closes it; the next "q" quits.
        self.assertIs(self.controller.mode, Mode.NORMAL)
        self.assertEqual(self.controller.browser.selected_entry().name, "b.txt")

    def test_first_frame_clears_screen_and_idle_ticks_do_not_redraw(self) -> None:
        self.run_keys(["", "", ""])

        self.assertEqual(self.frames[0], "\033[H\033[J")
        # One clear plus one initial frame; empty reads change nothing.
        self.assertEqual(len(self.frames), 2)
        self.assertIn("a.txt", self.frames[1])

    def test_viewport_height_follows_terminal_size(self) -> None:
        self.run_keys([], size=(40, 15))
        self.assertEqual(self.controller.viewport_height, 12)


if __name__ == "__main__":
    unittest.main()
