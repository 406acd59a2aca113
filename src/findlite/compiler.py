"""Expression compiler: turns predicate/action tokens into a Query."""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from findlite import FindliteError
from findlite.parsers import Comparison, parse_age, parse_non_negative, parse_size


class CompileError(FindliteError):
    """Raised for an expression that cannot be compiled.

    No traversal happens once this is raised.
    """


class FileType(enum.Enum):
    """Entry types selectable with ``-type``."""

    REGULAR = "f"
    DIRECTORY = "d"
    SYMLINK = "l"


@dataclass(frozen=True, slots=True)
class Query:
    """A compiled filter query.

    A predicate whose value is ``None`` (or ``False`` for ``empty_only``)
    is inactive and adds no constraint.

    Attributes:
        name_pattern: Glob matched against the entry's base name.
        ignore_case: Whether ``name_pattern`` is matched case-insensitively.
        path_pattern: Glob matched against the entry's display path.
        file_type: Required entry type.
        empty_only: Match only empty files and directories.
        max_depth: Deepest depth visited; deeper directories are pruned.
        min_depth: Shallowest depth that may match.
        size: Byte-size comparison.
        mtime: Modification-age comparison in whole days.
        print: Print matching entries.
        explicit_print: Whether ``-print`` was given.
        delete: Delete matching entries once the walk is done.
    """

    name_pattern: str | None = None
    ignore_case: bool = False
    path_pattern: str | None = None
    file_type: FileType | None = None
    empty_only: bool = False
    max_depth: int | None = None
    min_depth: int | None = None
    size: Comparison | None = None
    mtime: Comparison | None = None
    print: bool = True
    explicit_print: bool = False
    delete: bool = False


def _with_pattern(query: Query, token: str, value: str) -> Query:
    if token == "-name":
        return replace(query, name_pattern=value)
    if token == "-iname":
        return replace(query, name_pattern=value, ignore_case=True)
    return replace(query, path_pattern=value)


def _with_type(query: Query, value: str) -> Query:
    try:
        file_type = FileType(value)
    except ValueError:
        raise CompileError("invalid -type value (use f, d, or l)") from None
    return replace(query, file_type=file_type)


def _with_depth(query: Query, token: str, value: str) -> Query:
    try:
        depth = parse_non_negative(value)
    except ValueError:
        raise CompileError(f"invalid {token} value") from None
    if token == "-maxdepth":
        return replace(query, max_depth=depth)
    return replace(query, min_depth=depth)


def _with_size(query: Query, value: str) -> Query:
    try:
        return replace(query, size=parse_size(value))
    except ValueError as exc:
        raise CompileError(str(exc)) from exc


def _with_mtime(query: Query, value: str) -> Query:
    try:
        return replace(query, mtime=parse_age(value))
    except ValueError as exc:
        raise CompileError(str(exc)) from exc


# token -> (what the missing value is called, handler)
_VALUED: dict[str, tuple[str, Callable[[Query, str, str], Query]]] = {
    "-name": ("a pattern", _with_pattern),
    "-iname": ("a pattern", _with_pattern),
    "-path": ("a pattern", _with_pattern),
    "-type": ("a value", lambda q, _t, v: _with_type(q, v)),
    "-maxdepth": ("a number", _with_depth),
    "-mindepth": ("a number", _with_depth),
    "-size": ("a value", lambda q, _t, v: _with_size(q, v)),
    "-mtime": ("a value", lambda q, _t, v: _with_mtime(q, v)),
}


def compile_query(tokens: Sequence[str]) -> Query:
    """Compile an expression token list into a :class:`Query`.

    Tokens are read left to right. Value-bearing predicates consume
    exactly the following token. ``-delete`` turns off the implicit
    print unless ``-print`` was given before it; a later ``-print``
    turns printing back on.

    Args:
        tokens: Expression tokens, already separated from root paths.

    Returns:
        Query: The compiled query.

    Raises:
        CompileError: On a missing or invalid value, an empty token or
            an unsupported token.
    """
    query = Query()
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in _VALUED:
            what, handler = _VALUED[token]
            if i + 1 >= len(tokens):
                raise CompileError(f"{token} requires {what}")
            query = handler(query, token, tokens[i + 1])
            i += 2
            continue

        if token == "-empty":
            query = replace(query, empty_only=True)
        elif token == "-print":
            query = replace(query, print=True, explicit_print=True)
        elif token == "-delete":
            query = replace(query, delete=True, print=query.explicit_print)
        elif token == "":
            raise CompileError("empty expression")
        else:
            raise CompileError(f"unsupported expression: {token}")
        i += 1

    return query
