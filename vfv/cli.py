"""Command-line front door for vfv.

``vfv [PATH]`` starts the interactive browser, ``vfv find QUERY [PATH]`` runs a
one-shot search and prints the matches, and ``vfv init`` writes a default
config file. Every entry point returns a process exit status.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import load_config, write_default_config
from .search import (
    QueryTooLongError,
    SearchCoordinator,
    SearchFailed,
    SearchQuery,
    SearchResult,
    SearchTimeout,
)
from .search.engine import check_query_length
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

SUBCOMMANDS = frozenset({"find", "init"})
DEFAULT_FIND_LIMIT = 50
EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_TIMEOUT = 124
LOG_FILE_ENV_VAR = "VFV_LOG_FILE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _non_negative_int(value: str) -> int:
    """argparse type for integer values >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _non_negative_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def configure_logging(log_file: str | None, verbose: bool) -> None:
    """Attach handlers to the ``vfv`` logger.

    The terminal belongs to the UI, so nothing is emitted unless a log file
    is given (flag or ``$VFV_LOG_FILE``).
    """
    root = logging.getLogger("vfv")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(handler, logging.NullHandler) for handler in root.handlers):
        root.addHandler(logging.NullHandler())
    target = log_file or os.environ.get(LOG_FILE_ENV_VAR, "").strip()
    if not target:
        return
    try:
        handler = logging.FileHandler(Path(target).expanduser(), encoding="utf-8")
    except OSError as exc:
        print(f"vfv: cannot open log file {target}: {exc}", file=sys.stderr)
        return
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def _add_logging_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--log-file", default=None, help=f"Write logs to this file (or set ${LOG_FILE_ENV_VAR}).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vfv",
        description="Terminal file browser with fuzzy search, syntax-highlighted preview and jump navigation.",
        epilog="Subcommands: 'vfv find QUERY [PATH]' prints matches, 'vfv init' writes a default config.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to browse. Defaults to current directory.")
    parser.add_argument("--style", default=None, help="Pygments style name for the preview.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--version", action="version", version=f"vfv {__version__}")
    _add_logging_options(parser)
    return parser


def build_find_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vfv find",
        description="Run a fuzzy search for files and folders and print the matches.",
    )
    parser.add_argument("query", help="Search text; a '/' matches against relative paths.")
    parser.add_argument("path", nargs="?", default=None, help="Search base directory. Defaults to current directory.")
    parser.add_argument("-j", "--json", action="store_true", help="Print a JSON array of matches.")
    parser.add_argument("-c", "--compact", action="store_true", help="Single-line JSON output (with --json).")
    parser.add_argument(
        "-n",
        "--limit",
        type=_non_negative_int,
        default=DEFAULT_FIND_LIMIT,
        help=f"Maximum number of results (default: {DEFAULT_FIND_LIMIT}; 0 returns none).",
    )
    parser.add_argument("-1", "--first", action="store_true", help="Print only the best match.")
    parser.add_argument(
        "-t",
        "--timeout",
        type=_non_negative_float,
        default=0.0,
        help="Give up after this many seconds (0 waits forever).",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress diagnostics on stderr.")
    parser.add_argument("-e", "--exact", action="store_true", help="Exact name match instead of fuzzy.")
    parser.add_argument("-d", "--dir", action="store_true", help="Directories only.")
    _add_logging_options(parser)
    return parser


def build_init_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vfv init", description="Write a default config file.")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing config file.")
    _add_logging_options(parser)
    return parser


def result_to_json(result: SearchResult) -> dict[str, object]:
    return {
        "path": str(result.path),
        "name": result.name,
        "is_dir": result.is_dir,
        "score": result.score,
    }


def format_results(results: Sequence[SearchResult], as_json: bool, compact: bool) -> str:
    if as_json:
        payload = [result_to_json(result) for result in results]
        if compact:
            return json.dumps(payload, separators=(",", ":"))
        return json.dumps(payload, indent=2)
    return "\n".join(str(result.path) for result in results)


def run_find(args: argparse.Namespace, coordinator: SearchCoordinator | None = None) -> int:
    def warn(message: str) -> None:
        if not args.quiet:
            print(message, file=sys.stderr)

    base = Path(args.path).expanduser() if args.path else Path.cwd()
    query = SearchQuery(text=args.query.strip(), exact=args.exact, dirs_only=args.dir)
    limit = 1 if args.first else args.limit
    coordinator = coordinator or SearchCoordinator()

    try:
        check_query_length(query)
    except QueryTooLongError as exc:
        # Always reported, even with --quiet.
        print(f"vfv: {exc}", file=sys.stderr)
        return EXIT_NO_MATCH
    if query.is_empty:
        warn("vfv: empty query")
        return EXIT_NO_MATCH
    if not base.is_dir():
        warn(f"vfv: base directory not found: {base}")
        return EXIT_NO_MATCH

    handle = coordinator.start(base.resolve(), query, limit)
    try:
        outcome = coordinator.wait(handle, timeout=args.timeout or None)
    except SearchTimeout as exc:
        warn(f"vfv: {exc}")
        return EXIT_TIMEOUT
    if isinstance(outcome, SearchFailed):
        warn(f"vfv: {outcome.message}")
        return EXIT_NO_MATCH

    results = outcome.results
    if not results:
        warn("vfv: no matches")
        # JSON consumers still get a parseable document.
        if args.json:
            print(format_results([], True, args.compact))
        return EXIT_NO_MATCH
    print(format_results(results, args.json, args.compact))
    return EXIT_OK


def run_init(args: argparse.Namespace) -> int:
    try:
        path, written = write_default_config(force=args.force)
    except OSError as exc:
        print(f"vfv: cannot write config: {exc}", file=sys.stderr)
        return 1
    if written:
        print(f"Wrote default config to {path}")
        return 0
    print(f"Config already exists at {path} (use --force to overwrite)", file=sys.stderr)
    return 1


def run_browser(args: argparse.Namespace) -> int:
    from .session.app import NotATerminalError, run_session

    path = Path(args.path).expanduser() if args.path else Path.cwd()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        path = path.parent

    config = load_config()
    try:
        run_session(path, config, style=args.style, ui_theme=args.theme, no_color=args.no_color)
    except NotATerminalError as exc:
        print(f"vfv: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and run the selected command.

    The first argument selects a subcommand only when it is exactly ``find``
    or ``init``; anything else is treated as the directory to browse.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    command = argv[0] if argv and argv[0] in SUBCOMMANDS else None

    if command == "find":
        args = build_find_parser().parse_args(argv[1:])
        configure_logging(args.log_file, args.verbose)
        return run_find(args)
    if command == "init":
        args = build_init_parser().parse_args(argv[1:])
        configure_logging(args.log_file, args.verbose)
        return run_init(args)

    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.verbose)
    return run_browser(args)


if __name__ == "__main__":
    sys.exit(main())
