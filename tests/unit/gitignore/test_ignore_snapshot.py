"""Tests for git ignore snapshots and their cache."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

from vfv import gitignore
from vfv.gitignore import IgnoreSnapshot, clear_ignore_cache, get_ignore_snapshot, load_ignore_snapshot


class IgnoreSnapshotTests(unittest.TestCase):
    def test_ignored_directory_covers_its_subtree(self) -> None:
        root = Path("/repo")
        snapshot = IgnoreSnapshot(
            root=root,
            ignored_files=frozenset({root / "debug.log"}),
            ignored_dirs=frozenset({root / "build"}),
        )

        self.assertTrue(snapshot.is_ignored(root / "debug.log"))
        self.assertTrue(snapshot.is_ignored(root / "build"))
        self.assertTrue(snapshot.is_ignored(root / "build" / "deep" / "x.o"))
        self.assertFalse(snapshot.is_ignored(root / "src" / "main.py"))


class IgnoreCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_ignore_cache()

    def tearDown(self) -> None:
        clear_ignore_cache()

    def test_reuses_cached_snapshot_within_ttl(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            sentinel = mock.sentinel.snapshot
            with mock.patch("vfv.gitignore.load_ignore_snapshot", return_value=sentinel) as load:
                first = get_ignore_snapshot(root)
                second = get_ignore_snapshot(root)

        self.assertIs(first, sentinel)
        self.assertIs(second, sentinel)
        self.assertEqual(load.call_count, 1)

    def test_cache_is_safe_under_concurrent_workers(self) -> None:
        errors: list[Exception] = []

        def worker(offset: int) -> None:
            try:
                for idx in range(200):
                    get_ignore_snapshot(Path(tmp) / f"root{(idx + offset) % 64}")
            except Exception as exc:
                errors.append(exc)

        with tempfile.TemporaryDirectory() as tmp, mock.patch("vfv.gitignore.load_ignore_snapshot", return_value=None):
            threads = [threading.Thread(target=worker, args=(offset,)) for offset in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(timeout=10)

        self.assertEqual(errors, [])
        self.assertLessEqual(len(gitignore._IGNORE_CACHE), gitignore.IGNORE_CACHE_MAX)

    def test_cache_access_waits_for_lock(self) -> None:
        done = threading.Event()

        def lookup() -> None:
            get_ignore_snapshot(Path("/nonexistent-vfv-root"))
            done.set()

        with mock.patch("vfv.gitignore.load_ignore_snapshot", return_value=None):
            with gitignore._IGNORE_CACHE_LOCK:
                thread = threading.Thread(target=lookup)
                thread.start()
                self.assertFalse(done.wait(0.05))
            thread.join(timeout=5)

        self.assertTrue(done.is_set())

    def test_reloads_after_root_mtime_change(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with mock.patch(
                "vfv.gitignore.load_ignore_snapshot",
                side_effect=[mock.sentinel.first, mock.sentinel.second],
            ) as load:
                os.utime(root, ns=(1_000_000_000, 1_000_000_000))
                first = get_ignore_snapshot(root)
                os.utime(root, ns=(2_000_000_000, 2_000_000_000))
                second = get_ignore_snapshot(root)

        self.assertIs(first, mock.sentinel.first)
        self.assertIs(second, mock.sentinel.second)
        self.assertEqual(load.call_count, 2)

    def test_reloads_after_ttl_expiry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with mock.patch(
                "vfv.gitignore.load_ignore_snapshot",
                side_effect=[mock.sentinel.first, mock.sentinel.second],
            ) as load, mock.patch("vfv.gitignore.time.monotonic", side_effect=[100.0, 103.0]):
                get_ignore_snapshot(root)
                second = get_ignore_snapshot(root)

        self.assertIs(second, mock.sentinel.second)
        self.assertEqual(load.call_count, 2)


@unittest.skipIf(shutil.which("git") is None, "git is not installed")
class LoadIgnoreSnapshotTests(unittest.TestCase):
    def test_outside_work_tree_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("vfv.gitignore._git", return_value=None):
                self.assertIsNone(load_ignore_snapshot(Path(tmp)))

    def test_reads_ignored_paths_from_git(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            subprocess.run(["git", "init", "-q", str(root)], check=True)
            (root / ".gitignore").write_text("build/\n*.log\n", encoding="utf-8")
            (root / "build").mkdir()
            (root / "build" / "out.o").write_text("x", encoding="utf-8")
            (root / "debug.log").write_text("x", encoding="utf-8")
            (root / "main.py").write_text("x", encoding="utf-8")

            snapshot = load_ignore_snapshot(root)

        self.assertIsNotNone(snapshot)
        self.assertIn(root / "build", snapshot.ignored_dirs)
        self.assertIn(root / "debug.log", snapshot.ignored_files)
        self.assertFalse(snapshot.is_ignored(root / "main.py"))


if __name__ == "__main__":
    unittest.main()
