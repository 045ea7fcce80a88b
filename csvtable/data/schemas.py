"""
Table schema rules and the error hierarchy.

**Conceptual**: A table's only schema is its header list. This module defines
the "data contract" every table must satisfy:
  - The header list is non-empty.
  - Every stored row has exactly one field per header.
  - Two tables are compatible for concatenation only when their header lists
    are identical, position by position, case included.

**Error hierarchy**: Every error raised by this package derives from
TableError, so callers can catch one type at an orchestration boundary or the
specific subclass where they handle it. File system failures are not wrapped:
they surface as the built-in OSError raised by the I/O layer.

    TableError
      ├── CsvParseError          malformed CSV input
      │     └── FieldCountError  row width does not match header count
      ├── TableIndexError        row/column index out of range (also IndexError)
      ├── HeaderMismatchError    append with incompatible headers
      └── InvalidHeadersError    empty header list (also ValueError)
"""

from typing import List, Optional, Sequence

from csvtable.utils.text import copy_row, pad_row


class TableError(Exception):
    """Base class for all table errors."""
    pass


class CsvParseError(TableError):
    """
    Raised when CSV input cannot be decoded into records.

    **Conceptual**: Signals syntax problems reported by the CSV reader
    (unterminated quote, stray text after a closing quote), undecodable
    bytes, or input with no header record. A parse error aborts the load;
    no partial table is returned.

    Attributes:
        line: 1-based input line where the problem was detected, or None
              when the reader could not report one.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class FieldCountError(CsvParseError):
    """
    Raised when a row's field count does not fit the header count.

    In strict mode any mismatch raises. In permissive mode only rows with
    more fields than headers raise; shorter rows are padded instead.

    Attributes:
        expected: Number of headers.
        actual: Number of fields found in the offending row.
        line: 1-based input line of the row end, when parsing.
    """

    def __init__(self, expected: int, actual: int, line: Optional[int] = None, context: Optional[str] = None):
        where = f" at line {line}" if line is not None else ""
        ctx = f"{context}: " if context else ""
        super().__init__(
            f"{ctx}header count ({expected}) is not equal to entry count ({actual}){where}",
            line=line,
        )
        self.expected = expected
        self.actual = actual


class TableIndexError(TableError, IndexError):
    """Raised when a row or column index is out of range."""
    pass


class HeaderMismatchError(TableError):
    """Raised when appending a table whose headers differ from the receiver's."""
    pass


class InvalidHeadersError(TableError, ValueError):
    """Raised when a table is built from an empty header list."""
    pass


def validate_headers(
    headers: Sequence[str],
    context: str | None = None,
) -> List[str]:
    """
    Validate a header list and return an independent copy of it.

    **Functionally**:
      - Rejects an empty header list.
      - Duplicate names are allowed; lookups by name return the first match.
      - Header values are not trimmed or case-normalized.

    Args:
        headers: Column names in order.
        context: Optional source description for error messages.

    Returns:
        A new list with the same header strings.

    Raises:
        InvalidHeadersError: If `headers` is empty.
    """
    ctx = f"{context}: " if context else ""
    if not headers:
        raise InvalidHeadersError(f"{ctx}a table needs at least one header.")
    return copy_row(headers)


def validate_row_width(
    row: Sequence[str],
    header_count: int,
    line: int | None = None,
    permissive: bool = False,
    context: str | None = None,
) -> List[str]:
    """
    Check a row against the header count and return the row to store.

    **Functionally**:
      - Exact width: returns a copy of the row.
      - Too many fields: always raises FieldCountError.
      - Too few fields: raises FieldCountError in strict mode; in permissive
        mode returns a copy right-padded with empty strings.

    Args:
        row: Field values for one record.
        header_count: Number of headers the row must match.
        line: Optional input line number, reported in the error.
        permissive: Pad short rows instead of rejecting them.
        context: Optional source description for error messages.

    Returns:
        A new list of exactly `header_count` strings.

    Raises:
        FieldCountError: If the row cannot be made to fit.

    Example:
        >>> validate_row_width(["1"], 2, permissive=True)
        ['1', '']
        >>> validate_row_width(["1", "2", "3"], 2, permissive=True)
        Traceback (most recent call last):
        ...
        FieldCountError: header count (2) is not equal to entry count (3)
    """
    width = len(row)
    if width == header_count:
        return copy_row(row)
    if width < header_count and permissive:
        return pad_row(list(row), header_count)
    raise FieldCountError(header_count, width, line=line, context=context)


def headers_match(left: Sequence[str], right: Sequence[str]) -> bool:
    """
    Return True if two header lists are identical.

    Comparison is positional and case-sensitive, unlike header lookup, which
    ignores case. Two tables may only be concatenated when their columns are
    spelled exactly alike.
    """
    if len(left) != len(right):
        return False
    return all(a == b for a, b in zip(left, right))
