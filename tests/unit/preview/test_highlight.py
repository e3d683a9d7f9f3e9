"""Preview loading tests: sentinels, line caps, sanitization and styling."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from vfv.preview import BINARY_SENTINEL, DIRECTORY_SENTINEL, render_preview
from vfv.preview.highlight import is_binary, resolve_style, sanitize_terminal_text
from vfv.preview.types import parse_hex_color


class RenderPreviewTests(unittest.TestCase):
    def test_directory_yields_single_sentinel_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            lines = render_preview(Path(tmp))

        self.assertEqual([line.plain_text for line in lines], [DIRECTORY_SENTINEL])
        self.assertEqual(lines[0].line_number, 0)

    def test_binary_file_yields_sentinel(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "blob.bin"
            target.write_bytes(b"\x00" * 200 + b"abc")

            lines = render_preview(target)

        self.assertEqual([line.plain_text for line in lines], [BINARY_SENTINEL])

    def test_missing_file_reports_error_in_preview(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            lines = render_preview(Path(tmp) / "missing.txt")

        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].plain_text.startswith("Error reading file:"))

    def test_python_source_is_numbered_and_styled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "demo.py"
            target.write_text("def main():\n    return 1\n", encoding="utf-8")

            lines = render_preview(target, style_name="monokai")

        self.assertEqual([line.line_number for line in lines], [1, 2])
        self.assertEqual(lines[0].plain_text, "def main():")
        self.assertEqual(lines[1].plain_text, "    return 1")
        self.assertTrue(any(segment.style.fg is not None for segment in lines[0].segments))

    def test_max_lines_caps_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "long.txt"
            target.write_text("".join(f"row {idx}\n" for idx in range(50)), encoding="utf-8")

            lines = render_preview(target, max_lines=10)

        self.assertEqual(len(lines), 10)
        self.assertEqual(lines[-1].plain_text, "row 9")

    def test_no_color_produces_unstyled_segments(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "demo.py"
            target.write_text("x = 1\n", encoding="utf-8")

            lines = render_preview(target, no_color=True)

        self.assertEqual(lines[0].plain_text, "x = 1")
        self.assertTrue(all(segment.style.fg is None for segment in lines[0].segments))

    def test_unknown_extension_and_style_fall_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.unknownext"
            target.write_text("hello\nworld\n", encoding="utf-8")

            lines = render_preview(target, style_name="no-such-style")

        self.assertEqual([line.plain_text for line in lines], ["hello", "world"])

    def test_control_bytes_are_escaped_and_crlf_normalized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "ctl.txt"
            target.write_bytes(b"bell\x07\r\nnext\rline\n")

            lines = render_preview(target, no_color=True)

        self.assertEqual([line.plain_text for line in lines], ["bell\\x07", "next\\x0dline"])


class HighlightHelperTests(unittest.TestCase):
    def test_binary_threshold_is_a_tenth_of_probe(self) -> None:
        self.assertFalse(is_binary(b""))
        self.assertFalse(is_binary(b"a" * 90 + b"\x00" * 10))
        self.assertTrue(is_binary(b"a" * 89 + b"\x00" * 11))

    def test_sanitize_leaves_tabs_and_text_alone(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\tb"), "a\tb")
        self.assertEqual(sanitize_terminal_text("\x1b[31m"), "\\x1b[31m")

    def test_unknown_style_resolves_to_monokai(self) -> None:
        self.assertIs(resolve_style("definitely-not-a-style"), resolve_style("monokai"))

    def test_parse_hex_color(self) -> None:
        self.assertEqual(parse_hex_color("#ff0080"), (255, 0, 128))
        self.assertEqual(parse_hex_color("abc"), (170, 187, 204))
        self.assertIsNone(parse_hex_color("nothex"))
        self.assertIsNone(parse_hex_color(""))


if __name__ == "__main__":
    unittest.main()
