"""Bounded, gitignore-aware directory walk feeding the search engine."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ..gitignore import get_ignore_snapshot

MAX_WALK_DEPTH = 10
ALWAYS_SKIPPED_DIRS = frozenset({".git"})


@dataclass(frozen=True)
class Candidate:
    """A path beneath the walk base, tagged with its kind."""

    path: Path
    name: str
    display_path: str
    is_dir: bool


def walk_candidates(
    base: Path,
    max_depth: int = MAX_WALK_DEPTH,
    respect_gitignore: bool = True,
    should_stop: Callable[[], bool] | None = None,
) -> Iterator[Candidate]:
    """Yield every file and directory below ``base`` down to ``max_depth`` levels.

    Hidden entries are included; ``.git`` directories and paths ignored by
    git are pruned. Symlinked directories are reported but not followed.
    ``should_stop`` is checked once per directory so an abandoned walk ends
    promptly.
    """
    base = base.resolve()
    snapshot = get_ignore_snapshot(base) if respect_gitignore else None

    for dirpath, dirnames, filenames in os.walk(base):
        if should_stop is not None and should_stop():
            return
        current = Path(dirpath)
        rel_dir = current.relative_to(base)
        depth = len(rel_dir.parts) + 1

        dirnames[:] = sorted(
            (
                name
                for name in dirnames
                if name not in ALWAYS_SKIPPED_DIRS
                and (snapshot is None or not snapshot.is_ignored(current / name))
            ),
            key=str.casefold,
        )
        kept_files = sorted(
            (
                name
                for name in filenames
                if snapshot is None or not snapshot.is_ignored(current / name)
            ),
            key=str.casefold,
        )

        for name in dirnames:
            yield Candidate(
                path=current / name,
                name=name,
                display_path=(rel_dir / name).as_posix(),
                is_dir=True,
            )
        for name in kept_files:
            yield Candidate(
                path=current / name,
                name=name,
                display_path=(rel_dir / name).as_posix(),
                is_dir=False,
            )

        if depth >= max_depth:
            dirnames[:] = []
