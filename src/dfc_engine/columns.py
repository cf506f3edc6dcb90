"""
Column Index Codec

Conversion between numeric column positions and spreadsheet letter labels
(bijective base-26: A..Z, AA..AZ, ...). There is no zero digit, so each
step of the loop borrows one from the quotient.
"""
from __future__ import annotations

import string

from openpyxl.utils import column_index_from_string

from dfc_engine.errors import InvalidArgumentError


LETTERS = string.ascii_uppercase
BASE = len(LETTERS)


def _require_int(n: object) -> int:
    # bool is an int subclass but never a valid position
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(f"Column number must be an integer, got {n!r}")
    return n


def label_from_index(n: int) -> str:
    """
    Convert a 0-based column position to its letter label.

    Examples:
        0 -> "A", 25 -> "Z", 26 -> "AA", 27 -> "AB"

    Raises:
        InvalidArgumentError: If n is negative or not an integer.
    """
    n = _require_int(n)
    if n < 0:
        raise InvalidArgumentError(f"Column position must be >= 0, got {n}")

    letters: list[str] = []
    while True:
        n, remainder = divmod(n, BASE)
        letters.append(LETTERS[remainder])
        if n == 0:
            break
        n -= 1
    return "".join(reversed(letters))


def label_from_index_one_based(n: int) -> str:
    """
    Convert a 1-based column number to its letter label.

    Examples:
        1 -> "A", 26 -> "Z", 27 -> "AA", 28 -> "AB"

    Raises:
        InvalidArgumentError: If n is below 1 or not an integer.
    """
    n = _require_int(n)
    if n < 1:
        raise InvalidArgumentError(f"Column number must be >= 1, got {n}")

    letters: list[str] = []
    while n > 0:
        n, remainder = divmod(n - 1, BASE)
        letters.append(LETTERS[remainder])
    return "".join(reversed(letters))


def index_from_label(label: str) -> int:
    """
    Convert a letter label back to its 0-based column position.

    Case-insensitive; surrounding whitespace is ignored. Labels stop at
    "ZZZ", the last column openpyxl knows about.

    Raises:
        InvalidArgumentError: If the label is empty, not made of letters A-Z or past "ZZZ".
    """
    if not isinstance(label, str):
        raise InvalidArgumentError(f"Column label must be a string, got {label!r}")
    try:
        return column_index_from_string(label.strip().upper()) - 1
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid column label: {label!r}") from e


def resolve_column(ref: int | str) -> int:
    """Return the 0-based position for a position or a letter label."""
    if isinstance(ref, str):
        stripped = ref.strip()
        if stripped.isdigit():
            return int(stripped)
        return index_from_label(stripped)
    n = _require_int(ref)
    if n < 0:
        raise InvalidArgumentError(f"Column position must be >= 0, got {n}")
    return n
