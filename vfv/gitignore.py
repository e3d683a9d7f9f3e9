"""Gitignore-aware path filtering for the search walker.

Asks git once per search base for the ignored files and directories beneath
it, then answers membership questions from that snapshot. Outside a git work
tree (or without a git binary) nothing is ignored.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

IGNORE_CACHE_MAX = 32
IGNORE_CACHE_TTL_SECONDS = 2.0


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


@dataclass(frozen=True)
class IgnoreSnapshot:
    """Ignored paths below ``root`` as reported by ``git ls-files``.

    Directory entries cover their whole subtree, so the walker can prune a
    directory without visiting it.
    """

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        if path in self.ignored_files or path in self.ignored_dirs:
            return True
        for parent in path.parents:
            if parent in self.ignored_dirs:
                return True
            if parent == self.root:
                break
        return False


@dataclass(frozen=True)
class _CacheEntry:
    snapshot: IgnoreSnapshot | None
    root_mtime_ns: int | None
    loaded_at: float


_IGNORE_CACHE: OrderedDict[Path, _CacheEntry] = OrderedDict()
# Search workers from superseded and current searches can overlap.
_IGNORE_CACHE_LOCK = threading.Lock()


def clear_ignore_cache() -> None:
    """Drop every cached snapshot."""
    with _IGNORE_CACHE_LOCK:
        _IGNORE_CACHE.clear()


def _git(args: list[str], cwd: Path) -> bytes | None:
    try:
        proc = subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return proc.stdout


def load_ignore_snapshot(root: Path) -> IgnoreSnapshot | None:
    """Query git for ignored paths under ``root``.

    Returns ``None`` when git is missing, ``root`` is not inside a work tree,
    or a git command fails.
    """
    if shutil.which("git") is None:
        return None

    root = root.resolve()
    top_level = _git(["rev-parse", "--show-toplevel"], root)
    if not top_level:
        return None
    repo_root = Path(top_level.decode("utf-8", errors="replace").strip()).resolve()
    if not _is_within(root, repo_root):
        return None

    listing = _git(
        ["ls-files", "-z", "--others", "--ignored", "--exclude-standard", "--directory"],
        repo_root,
    )
    if listing is None:
        return None

    ignored_files: set[Path] = set()
    ignored_dirs: set[Path] = set()
    for raw in listing.split(b"\x00"):
        if not raw:
            continue
        rel = raw.decode("utf-8", errors="replace")
        marked_dir = rel.endswith("/")
        rel = rel.rstrip("/")
        if not rel:
            continue
        path = repo_root / rel
        if path == root or not _is_within(path, root):
            continue
        if marked_dir or path.is_dir():
            ignored_dirs.add(path)
        else:
            ignored_files.add(path)

    logger.debug(
        "git ignore snapshot for %s: %d files, %d dirs",
        root,
        len(ignored_files),
        len(ignored_dirs),
    )
    return IgnoreSnapshot(
        root=root,
        ignored_files=frozenset(ignored_files),
        ignored_dirs=frozenset(ignored_dirs),
    )


def get_ignore_snapshot(root: Path) -> IgnoreSnapshot | None:
    """Return a cached snapshot for ``root`` with bounded staleness.

    Entries are reloaded when the root directory mtime changes or the entry
    is older than ``IGNORE_CACHE_TTL_SECONDS``.
    """
    root = root.resolve()
    try:
        root_mtime_ns: int | None = root.stat().st_mtime_ns
    except OSError:
        root_mtime_ns = None
    now = time.monotonic()

    with _IGNORE_CACHE_LOCK:
        cached = _IGNORE_CACHE.get(root)
        if (
            cached is not None
            and cached.root_mtime_ns == root_mtime_ns
            and now - cached.loaded_at <= IGNORE_CACHE_TTL_SECONDS
        ):
            _IGNORE_CACHE.move_to_end(root)
            return cached.snapshot

    # git runs outside the lock; a concurrent load of the same root just overwrites.
    snapshot = load_ignore_snapshot(root)
    with _IGNORE_CACHE_LOCK:
        _IGNORE_CACHE[root] = _CacheEntry(snapshot=snapshot, root_mtime_ns=root_mtime_ns, loaded_at=now)
        _IGNORE_CACHE.move_to_end(root)
        while len(_IGNORE_CACHE) > IGNORE_CACHE_MAX:
            _IGNORE_CACHE.popitem(last=False)
    return snapshot
