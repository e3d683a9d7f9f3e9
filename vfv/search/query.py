"""Parse free-form search input into a ``SearchQuery``.

Input is split on whitespace. ``-e/--exact``, ``-d/--dir`` and
``-b/--base <path>`` are recognized anywhere in the input; every other token
becomes part of the query text, in its original order.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

EXACT_FLAGS = frozenset({"-e", "--exact"})
DIR_FLAGS = frozenset({"-d", "--dir"})
BASE_FLAGS = frozenset({"-b", "--base"})


@dataclass(frozen=True)
class SearchQuery:
    text: str
    exact: bool = False
    dirs_only: bool = False
    base_path: Path | None = None

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def is_path_query(self) -> bool:
        """Whether matching should look at relative paths instead of names."""
        return "/" in self.text

    @property
    def last_segment(self) -> str:
        """Final ``/``-separated component of the query text."""
        return self.text.rsplit("/", 1)[-1]


def expand_home(raw: str, home: Path | None = None) -> Path:
    """Expand a leading ``~`` or ``~/`` against the home directory."""
    if home is None:
        home = Path.home()
    if raw == "~":
        return home
    if raw.startswith("~/"):
        return home / raw[2:]
    return Path(raw)


def parse_query(raw: str, default_dirs_only: bool = False, home: Path | None = None) -> SearchQuery:
    """Split ``raw`` into query text, flags and an optional base override.

    Repeated flags are tolerated: the last ``-b`` value wins and ``-e``/``-d``
    are idempotent. A ``-b`` without a following token is ignored.
    """
    exact = False
    dirs_only = default_dirs_only
    base_path: Path | None = None
    words: list[str] = []

    tokens = raw.split()
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        if token in EXACT_FLAGS:
            exact = True
        elif token in DIR_FLAGS:
            dirs_only = True
        elif token in BASE_FLAGS:
            if idx + 1 < len(tokens):
                idx += 1
                base_path = expand_home(tokens[idx], home)
        else:
            words.append(token)
        idx += 1

    return SearchQuery(
        text=" ".join(words),
        exact=exact,
        dirs_only=dirs_only,
        base_path=base_path,
    )
