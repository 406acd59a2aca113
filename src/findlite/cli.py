"""CLI entry point for findlite: I/O boundary only."""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from findlite import FindliteError, __version__
from findlite.compiler import compile_query
from findlite.gitignore import GitignoreFilter
from findlite.walker import find

USAGE = "usage: findlite [--option...] [path...] [expression...]"


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the leading ``--`` options.

    Returns:
        argparse.ArgumentParser: Parser for options given before any path.
    """
    parser = argparse.ArgumentParser(
        prog="findlite",
        usage=USAGE,
        description="find-like filesystem search with a small expression language",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Skip entries ignored by each root's .gitignore",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log traversal details to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def is_expression_start(arg: str) -> bool:
    return arg in ("!", "(", ")") or arg.startswith("-")


def split_paths_and_expressions(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split arguments at the first expression token.

    Returns:
        tuple[list[str], list[str]]: Root paths and expression tokens.
    """
    for i, arg in enumerate(args):
        if is_expression_start(arg):
            return list(args[:i]), list(args[i:])
    return list(args), []


def _split_long_options(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Take the leading ``--name`` options off *args*; ``--`` ends them."""
    options: list[str] = []
    for i, arg in enumerate(args):
        if arg == "--":
            return options, list(args[i + 1 :])
        if not arg.startswith("--"):
            return options, list(args[i:])
        options.append(arg)
    return options, []


def run(argv: Sequence[str], out: TextIO | None = None) -> int:
    """Compile and run one search; returns the number of matches.

    Raises:
        FindliteError: On an invalid expression or pattern.
        OSError: On the first filesystem error.
    """
    option_args, rest = _split_long_options(argv)
    options = build_parser().parse_args(option_args)

    if options.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="findlite: %(name)s: %(message)s",
            stream=sys.stderr,
        )

    paths, expressions = split_paths_and_expressions(rest)
    if not paths:
        paths = ["."]

    query = compile_query(expressions)
    return find(
        paths,
        query,
        out if out is not None else sys.stdout,
        entry_filter_factory=GitignoreFilter.for_root if options.gitignore else None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stderr.write(USAGE + "\n")
        return 1

    try:
        run(args)
        sys.stdout.flush()
    except BrokenPipeError:
        with contextlib.suppress(Exception):
            sys.stdout.close()
        return 0
    except (FindliteError, OSError) as exc:
        sys.stderr.write(f"findlite: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
