"""CLI tests for ``vfv find``, ``vfv init`` and the interactive entry."""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from vfv import cli
from vfv.config import AppConfig
from vfv.search import SearchTimeout


def _make_tree(root: Path) -> None:
    (root / "src").mkdir()
    (root / "tests").mkdir()
    (root / "src" / "main.rs").write_text("", encoding="utf-8")
    (root / "src" / "lib.rs").write_text("", encoding="utf-8")
    (root / "README.md").write_text("", encoding="utf-8")


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        _make_tree(self.root)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
            code = cli.main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()


class FindCommandTests(CliTestCase):
    def test_plain_output_lists_absolute_paths(self) -> None:
        code, out, _ = self.run_cli("find", "main", str(self.root))

        self.assertEqual(code, 0)
        self.assertIn(str(self.root / "src" / "main.rs"), out.splitlines())

    def test_json_output_fields(self) -> None:
        code, out, _ = self.run_cli("find", "main.rs", str(self.root), "--json", "--exact")

        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(
            payload,
            [{"path": str(self.root / "src" / "main.rs"), "name": "main.rs", "is_dir": False, "score": 1000}],
        )

        _, short_out, _ = self.run_cli("find", "main.rs", str(self.root), "-j", "-e")
        self.assertEqual(json.loads(short_out), payload)

    def test_compact_json_is_single_line(self) -> None:
        code, out, _ = self.run_cli("find", "r", str(self.root), "--json", "--compact")

        self.assertEqual(code, 0)
        self.assertEqual(len(out.strip().splitlines()), 1)
        self.assertIsInstance(json.loads(out), list)

        code, short_out, _ = self.run_cli("find", "r", str(self.root), "-j", "-c")
        self.assertEqual(code, 0)
        self.assertEqual(short_out, out)

    def test_limit_and_first(self) -> None:
        _, limited, _ = self.run_cli("find", "r", str(self.root), "--json", "--limit", "1")
        _, first, _ = self.run_cli("find", "r", str(self.root), "--json", "-1")

        self.assertLessEqual(len(json.loads(limited)), 1)
        self.assertEqual(len(json.loads(first)), 1)

    def test_zero_limit_returns_no_results_without_usage_error(self) -> None:
        code, out, err = self.run_cli("find", "main", str(self.root), "-n", "0")

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("no matches", err)

        code, out, _ = self.run_cli("find", "main", str(self.root), "--limit", "0", "--json")
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(out), [])

    def test_negative_limit_is_a_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("find", "main", str(self.root), "-n", "-3")

        self.assertEqual(ctx.exception.code, 2)

    def test_dir_flag_returns_only_directories(self) -> None:
        code, out, _ = self.run_cli("find", "src", str(self.root), "--dir", "--json")

        self.assertEqual(code, 0)
        self.assertTrue(all(item["is_dir"] for item in json.loads(out)))

    def test_no_results_exits_1(self) -> None:
        code, out, err = self.run_cli("find", "nonexistent_file_xyz", str(self.root))

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("no matches", err)

    def test_quiet_suppresses_diagnostics(self) -> None:
        code, _, err = self.run_cli("find", "nonexistent_file_xyz", str(self.root), "-q")

        self.assertEqual(code, 1)
        self.assertEqual(err, "")

    def test_query_too_long_exits_1_with_message(self) -> None:
        code, _, err = self.run_cli("find", "a" * 1001, str(self.root), "--quiet")

        self.assertEqual(code, 1)
        self.assertIn("Query too long", err)

    def test_timeout_zero_waits_without_deadline(self) -> None:
        code, _, _ = self.run_cli("find", "x", str(self.root), "--timeout", "0")
        self.assertIn(code, (0, 1))

    def test_timeout_exits_124(self) -> None:
        with mock.patch("vfv.cli.SearchCoordinator.wait", side_effect=SearchTimeout("slow")):
            code, _, err = self.run_cli("find", "main", str(self.root), "-t", "0.01")

        self.assertEqual(code, 124)
        self.assertIn("slow", err)

    def test_missing_base_directory(self) -> None:
        code, _, err = self.run_cli("find", "main", str(self.root / "missing"))

        self.assertEqual(code, 1)
        self.assertIn("base directory not found", err)

    def test_default_base_is_current_directory(self) -> None:
        previous = Path.cwd()
        try:
            os.chdir(self.root)
            code, out, _ = self.run_cli("find", "lib.rs", "-e")
        finally:
            os.chdir(previous)

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), str(self.root / "src" / "lib.rs"))


class InitCommandTests(CliTestCase):
    def test_init_writes_then_refuses_without_force(self) -> None:
        path = self.root / "cfg" / "config.json"
        with mock.patch.dict(os.environ, {"VFV_CONFIG": str(path)}):
            first, out, _ = self.run_cli("init")
            second, _, err = self.run_cli("init")
            forced, _, _ = self.run_cli("init", "--force")

        self.assertEqual(first, 0)
        self.assertIn(str(path), out)
        self.assertEqual(second, 1)
        self.assertIn("--force", err)
        self.assertEqual(forced, 0)
        self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["editor"], "vim")


class InteractiveEntryTests(CliTestCase):
    def test_path_argument_starts_session(self) -> None:
        with mock.patch("vfv.session.app.run_session") as run_session, mock.patch(
            "vfv.cli.load_config", return_value=AppConfig()
        ):
            code, _, _ = self.run_cli(str(self.root / "src"), "--no-color", "--theme", "ocean")

        self.assertEqual(code, 0)
        path, config = run_session.call_args.args
        self.assertEqual(path, self.root / "src")
        self.assertEqual(config, AppConfig())
        self.assertEqual(run_session.call_args.kwargs, {"style": None, "ui_theme": "ocean", "no_color": True})

    def test_file_argument_browses_its_parent(self) -> None:
        with mock.patch("vfv.session.app.run_session") as run_session, mock.patch(
            "vfv.cli.load_config", return_value=AppConfig()
        ):
            self.run_cli(str(self.root / "README.md"))

        self.assertEqual(run_session.call_args.args[0], self.root)

    def test_missing_path_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self.run_cli(str(self.root / "nope"))

    def test_version_flag(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("--version")
        self.assertEqual(ctx.exception.code, 0)

    def test_help_mentions_fuzzy_search(self) -> None:
        self.assertIn("fuzzy search", cli.build_parser().format_help())


def _close_file_handlers() -> None:
    logger = cli.logging.getLogger("vfv")
    for handler in list(logger.handlers):
        if isinstance(handler, cli.logging.FileHandler):
            handler.close()
            logger.removeHandler(handler)


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        _close_file_handlers()

    def test_log_file_receives_debug_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "vfv.log"
            cli.configure_logging(str(log_path), verbose=True)
            cli.logging.getLogger("vfv.test").debug("hello from test")
            _close_file_handlers()

            self.assertIn("hello from test", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
