"""Shell-style glob matching with strict pattern validation.

Unlike :mod:`fnmatch`, ``*`` and ``?`` never match a path separator and
a malformed pattern is an error instead of being taken literally. Only
``^`` negates a ``[...]`` class (``!`` is an ordinary member), and a
negated class may match the separator.
"""

from __future__ import annotations

import functools
import os
import re

from findlite import FindliteError

_SEP = os.sep


class PatternError(FindliteError):
    """Raised for a syntactically invalid glob pattern."""


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Read one (possibly escaped) character inside a ``[...]`` class."""
    if i >= len(pattern) or pattern[i] in "-]":
        raise PatternError(f"syntax error in pattern: {pattern}")
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            raise PatternError(f"syntax error in pattern: {pattern}")
    return pattern[i], i + 1


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the class starting after ``[`` at index *i*."""
    negate = i < len(pattern) and pattern[i] == "^"
    if negate:
        i += 1

    ranges: list[str] = []
    count = 0
    while True:
        if i < len(pattern) and pattern[i] == "]" and count > 0:
            i += 1
            break
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
        count += 1
        # a reversed range matches nothing
        if lo <= hi:
            ranges.append(re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}")

    if not ranges:
        return (".", i) if negate else ("(?!)", i)
    if negate:
        return f"[^{''.join(ranges)}]", i
    return f"[{''.join(ranges)}]", i


def translate(pattern: str) -> str:
    """Translate *pattern* into an equivalent regular expression.

    Raises:
        PatternError: If the pattern is malformed.
    """
    not_sep = f"[^{re.escape(_SEP)}]"
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        i += 1
        if ch == "*":
            parts.append(f"{not_sep}*")
        elif ch == "?":
            parts.append(not_sep)
        elif ch == "[":
            part, i = _translate_class(pattern, i)
            parts.append(part)
        elif ch == "\\":
            if i >= len(pattern):
                raise PatternError(f"syntax error in pattern: {pattern}")
            parts.append(re.escape(pattern[i]))
            i += 1
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(translate(pattern), re.DOTALL)


def glob_match(pattern: str, name: str) -> bool:
    """Return whether *name* matches *pattern* in full.

    Raises:
        PatternError: If the pattern is malformed.
    """
    return compile_pattern(pattern).fullmatch(name) is not None
