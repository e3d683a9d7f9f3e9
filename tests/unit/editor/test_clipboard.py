"""Clipboard helper tests."""

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from vfv.clipboard import CLIPBOARD_TIMEOUT_SECONDS, copy_text_to_clipboard


class CopyTextToClipboardTests(unittest.TestCase):
    def test_empty_text_is_not_copied(self) -> None:
        self.assertFalse(copy_text_to_clipboard(""))

    def test_first_available_tool_receives_text(self) -> None:
        with mock.patch("vfv.clipboard.clipboard_commands", return_value=[["missing"], ["xclip", "-i"]]), mock.patch(
            "vfv.clipboard.shutil.which", side_effect=lambda name: None if name == "missing" else f"/usr/bin/{name}"
        ), mock.patch("vfv.clipboard.subprocess.run", return_value=subprocess.CompletedProcess([], 0)) as run:
            self.assertTrue(copy_text_to_clipboard("/tmp/a.txt"))

        run.assert_called_once_with(
            ["xclip", "-i"],
            input="/tmp/a.txt",
            text=True,
            check=False,
            timeout=CLIPBOARD_TIMEOUT_SECONDS,
        )

    def test_failures_fall_through_to_false(self) -> None:
        with mock.patch("vfv.clipboard.clipboard_commands", return_value=[["a"], ["b"]]), mock.patch(
            "vfv.clipboard.shutil.which", return_value="/usr/bin/x"
        ), mock.patch(
            "vfv.clipboard.subprocess.run",
            side_effect=[OSError("boom"), subprocess.CompletedProcess([], 1)],
        ):
            self.assertFalse(copy_text_to_clipboard("text"))

    def test_hung_tool_times_out_and_next_tool_is_tried(self) -> None:
        with mock.patch("vfv.clipboard.clipboard_commands", return_value=[["wl-copy"], ["xsel"]]), mock.patch(
            "vfv.clipboard.shutil.which", return_value="/usr/bin/x"
        ), mock.patch(
            "vfv.clipboard.subprocess.run",
            side_effect=[subprocess.TimeoutExpired(["wl-copy"], CLIPBOARD_TIMEOUT_SECONDS), subprocess.CompletedProcess([], 0)],
        ) as run:
            self.assertTrue(copy_text_to_clipboard("text"))

        self.assertEqual([call.args[0] for call in run.call_args_list], [["wl-copy"], ["xsel"]])


if __name__ == "__main__":
    unittest.main()
