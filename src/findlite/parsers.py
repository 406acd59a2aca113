"""Value parsers for numeric predicates: comparison prefix, size and age."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Final

_DIGITS = re.compile(r"[0-9]+")

# values must fit a signed 64-bit integer
MAX_VALUE: Final = 2**63 - 1

SIZE_UNITS: Final[dict[str, int]] = {
    "": 1,
    "c": 1,
    "b": 512,
    "k": 1024,
    "m": 1024**2,
    "g": 1024**3,
}


class CompareOp(enum.Enum):
    """Comparison selected by an optional ``+``/``-`` prefix."""

    EXACT = "exact"
    LESS = "less"
    GREATER = "greater"


@dataclass(frozen=True, slots=True)
class Comparison:
    """A parsed numeric predicate value.

    Attributes:
        op: How the actual value is compared.
        value: Reference value (bytes for sizes, whole days for ages).
    """

    op: CompareOp
    value: int

    def test(self, actual: int) -> bool:
        if self.op is CompareOp.GREATER:
            return actual > self.value
        if self.op is CompareOp.LESS:
            return actual < self.value
        return actual == self.value


def parse_compare(text: str) -> tuple[CompareOp, str]:
    """Split the comparison prefix off *text*.

    Returns:
        tuple[CompareOp, str]: The operator and the remaining text.
    """
    if text.startswith("+"):
        return CompareOp.GREATER, text[1:]
    if text.startswith("-"):
        return CompareOp.LESS, text[1:]
    return CompareOp.EXACT, text


def parse_non_negative(text: str) -> int:
    """Parse a plain base-10 non-negative integer.

    Raises:
        ValueError: If *text* contains anything but ASCII digits or the
            value exceeds ``MAX_VALUE``.
    """
    if not _DIGITS.fullmatch(text):
        raise ValueError(f"not a non-negative integer: {text!r}")
    value = int(text)
    if value > MAX_VALUE:
        raise ValueError(f"value out of range: {text}")
    return value


def parse_size(text: str) -> Comparison:
    """Parse a ``-size`` value such as ``10``, ``+1m`` or ``-512c``.

    A trailing non-digit is a unit letter (case-insensitive). The number
    is checked before the unit, so ``abc`` is an invalid value while
    ``5x`` is an invalid unit.

    Raises:
        ValueError: On a malformed number or an unknown unit.
    """
    op, rest = parse_compare(text)
    unit = ""
    if rest and not rest[-1].isdigit():
        unit = rest[-1].lower()
        rest = rest[:-1]

    try:
        count = parse_non_negative(rest)
    except ValueError:
        raise ValueError("invalid -size value") from None

    if unit not in SIZE_UNITS:
        raise ValueError("invalid -size unit")

    return Comparison(op, count * SIZE_UNITS[unit])


def parse_age(text: str) -> Comparison:
    """Parse a ``-mtime`` value in whole days, e.g. ``3``, ``+7``, ``-1``.

    Raises:
        ValueError: If the value is not a non-negative integer.
    """
    op, rest = parse_compare(text)
    try:
        days = parse_non_negative(rest)
    except ValueError:
        raise ValueError("invalid -mtime value") from None
    return Comparison(op, days)
