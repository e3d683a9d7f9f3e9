"""Walker tests: depth bound, skipped directories and ignore pruning."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from vfv.gitignore import IgnoreSnapshot
from vfv.search import walk_candidates


class WalkCandidatesTests(unittest.TestCase):
    def test_yields_relative_display_paths_including_hidden_but_not_git(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "src").mkdir()
            (root / "src" / "main.rs").write_text("x", encoding="utf-8")
            (root / ".config").write_text("x", encoding="utf-8")
            (root / ".git").mkdir()
            (root / ".git" / "HEAD").write_text("x", encoding="utf-8")

            found = {c.display_path: c.is_dir for c in walk_candidates(root, respect_gitignore=False)}

        self.assertEqual(found, {"src": True, "src/main.rs": False, ".config": False})

    def test_depth_is_bounded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            deep = root
            for idx in range(5):
                deep = deep / f"d{idx}"
            deep.mkdir(parents=True)
            (deep / "leaf.txt").write_text("x", encoding="utf-8")

            shallow = [c.display_path for c in walk_candidates(root, max_depth=2, respect_gitignore=False)]
            full = [c.display_path for c in walk_candidates(root, respect_gitignore=False)]

        self.assertEqual(shallow, ["d0", "d0/d1"])
        self.assertIn("d0/d1/d2/d3/d4/leaf.txt", full)

    def test_ignored_paths_are_pruned(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "build").mkdir()
            (root / "build" / "out.o").write_text("x", encoding="utf-8")
            (root / "keep.py").write_text("x", encoding="utf-8")
            (root / "debug.log").write_text("x", encoding="utf-8")
            snapshot = IgnoreSnapshot(
                root=root,
                ignored_files=frozenset({root / "debug.log"}),
                ignored_dirs=frozenset({root / "build"}),
            )

            with mock.patch("vfv.search.walker.get_ignore_snapshot", return_value=snapshot):
                found = [c.display_path for c in walk_candidates(root)]

        self.assertEqual(found, ["keep.py"])

    def test_stop_request_ends_walk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("x", encoding="utf-8")

            found = list(walk_candidates(root, respect_gitignore=False, should_stop=lambda: True))

        self.assertEqual(found, [])


if __name__ == "__main__":
    unittest.main()
