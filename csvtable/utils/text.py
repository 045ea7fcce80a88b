"""
Text helpers for header lookups and row handling.

Every cell in a table is a string, so the only comparisons the table needs are
exact equality and case-insensitive equality. Both live here so the table and
the schema checks agree on what "the same header" means.
"""

from typing import Iterable, List


def equal_fold(left: str, right: str) -> bool:
    """
    Compare two strings case-insensitively.

    **Functionally**:
      - Uses str.casefold(), which handles non-ASCII case pairs
        (e.g., "Straße" vs "STRASSE") that str.lower() misses.
      - Does not strip whitespace: " name" and "name" are different.

    Args:
        left: First string.
        right: Second string.

    Returns:
        True if the strings are equal ignoring case.

    Example:
        >>> equal_fold("Name", "NAME")
        True
        >>> equal_fold("name", "name ")
        False
    """
    return left.casefold() == right.casefold()


def copy_row(row: Iterable[str]) -> List[str]:
    """Return an independent list copy of a row."""
    return list(row)


def pad_row(row: List[str], width: int) -> List[str]:
    """
    Right-pad a row with empty strings up to `width` fields.

    Rows already at or beyond `width` are returned as a copy, unchanged.
    """
    missing = width - len(row)
    if missing <= 0:
        return copy_row(row)
    return copy_row(row) + [""] * missing
