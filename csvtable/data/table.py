"""
In-memory CSV table: an ordered header list plus an ordered list of rows.

**Conceptual**: A Table is the parsed form of a CSV file. The first record
becomes the header list; every later record becomes a row with exactly one
text value per header. Tables are plain mutable values: build one with
`Table.from_headers` or the parsers in csvtable.data.io, read it through the
accessors below, change single cells, or append another table's rows.

**Copy semantics**: Nothing handed out by a Table aliases its internal state.
`headers`, `row_at`, iteration and the find methods all return fresh lists,
and `append` copies the rows it takes from the other table. Mutating a
returned list never changes the table, and mutating one table after an
append never changes the other.

**Lookups vs. schema checks**: `header_index` and the find methods compare
case-insensitively. `append` compares header lists exactly (case-sensitive).

**Thread safety**: None. Guard a shared Table with an external lock.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from csvtable.data.schemas import (
    HeaderMismatchError,
    TableIndexError,
    headers_match,
    validate_headers,
    validate_row_width,
)
from csvtable.utils.text import copy_row, equal_fold

logger = logging.getLogger(__name__)

# Sentinel index returned by lookups that find nothing.
NOT_FOUND = -1


class Table:
    """
    Header-indexed collection of text rows.

    Attributes are private; use the accessors. Every stored row has exactly
    `header_count` fields.

    Example:
        >>> table = Table(["id", "name"], [["1", "alice"], ["2", "bob"]])
        >>> table.header_index("NAME")
        1
        >>> table.find_by_header("name", "ALICE")
        (['1', 'alice'], 0)
        >>> table.row_at(5) is None
        True
    """

    def __init__(self, headers: Sequence[str], rows: Iterable[Sequence[str]] = ()):
        """
        Build a table from headers and fully-formed rows.

        Args:
            headers: Column names (non-empty; duplicates allowed).
            rows: Rows to copy in, each with exactly len(headers) fields.

        Raises:
            InvalidHeadersError: If `headers` is empty.
            FieldCountError: If any row's width differs from the header count.
        """
        self._headers: List[str] = validate_headers(headers)
        self._rows: List[List[str]] = [
            validate_row_width(row, len(self._headers)) for row in rows
        ]

    @classmethod
    def from_headers(cls, headers: Sequence[str]) -> "Table":
        """Create an empty table with the given headers."""
        return cls(headers)

    def __repr__(self) -> str:
        return f"Table(headers={self._headers!r}, rows={len(self._rows)})"

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[List[str]]:
        for row in self._rows:
            yield copy_row(row)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def headers(self) -> List[str]:
        """Copy of the header list."""
        return copy_row(self._headers)

    @property
    def header_count(self) -> int:
        return len(self._headers)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def row_at(self, index: int) -> Optional[List[str]]:
        """
        Return a copy of row `index`, or None if it does not exist.

        Unlike the other accessors this never raises: an out-of-range
        (or negative) index yields None.
        """
        if index < 0 or index >= len(self._rows):
            return None
        return copy_row(self._rows[index])

    def header_at(self, index: int) -> str:
        """
        Return header `index`.

        Raises:
            TableIndexError: If `index` is negative or >= header_count.
        """
        if index < 0 or index >= len(self._headers):
            raise TableIndexError(
                f"Index ({index}) is out of range ({len(self._headers)})"
            )
        return self._headers[index]

    def header_index(self, name: str) -> int:
        """
        Return the position of the first header equal to `name` ignoring case.

        Returns NOT_FOUND (-1) when no header matches.
        """
        for position, header in enumerate(self._headers):
            if equal_fold(header, name):
                return position
        return NOT_FOUND

    def value_at(self, row: int, col: int) -> str:
        """
        Return the cell at (`row`, `col`).

        Raises:
            TableIndexError: If either index is out of bounds.
        """
        self._check_cell(row, col)
        return self._rows[row][col]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_value_at(self, row: int, col: int, value: str) -> None:
        """
        Overwrite the cell at (`row`, `col`) in place.

        Cells are text: non-string values are stored as str(value).

        Raises:
            TableIndexError: If either index is out of bounds.
        """
        self._check_cell(row, col)
        self._rows[row][col] = value if isinstance(value, str) else str(value)

    def append(self, other: "Table") -> None:
        """
        Append copies of all of `other`'s rows to this table.

        **Functionally**:
          - Header lists must match exactly: same length, same strings at
            every position, same case.
          - On mismatch nothing is appended.
          - Rows are copied, so later edits to either table stay local to it.
          - Appending a table to itself doubles its rows.

        Raises:
            HeaderMismatchError: If the header lists differ.
        """
        if not headers_match(self._headers, other._headers):
            raise HeaderMismatchError(
                f"Cannot append table with headers {other._headers} "
                f"to table with headers {self._headers}."
            )
        # Snapshot first so self.append(self) terminates.
        incoming = [copy_row(row) for row in other._rows]
        self._rows.extend(incoming)
        logger.debug("Appended %d rows (now %d)", len(incoming), len(self._rows))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_by_header(self, name: str, value: str) -> Tuple[Optional[List[str]], int]:
        """
        Find the first row whose `name` column equals `value` ignoring case.

        Returns:
            (row copy, row index), or (None, NOT_FOUND) if the header does not
            exist or no row matches.
        """
        col = self.header_index(name)
        if col == NOT_FOUND:
            return None, NOT_FOUND
        return self.find_by_index(col, value)

    def find_by_index(self, col: int, value: str) -> Tuple[Optional[List[str]], int]:
        """
        Find the first row whose cell at `col` equals `value` ignoring case.

        Scans from row 0 and stops at the first match.

        Returns:
            (row copy, row index), or (None, NOT_FOUND) if no row matches.

        Raises:
            TableIndexError: If `col` is not a valid column index.
        """
        if col < 0 or col >= len(self._headers):
            raise TableIndexError(
                f"Header Index ({col}) out of bounds. Header Count ({len(self._headers)})"
            )
        for index, row in enumerate(self._rows):
            if equal_fold(row[col], value):
                return copy_row(row), index
        return None, NOT_FOUND

    def _check_cell(self, row: int, col: int) -> None:
        if row < 0 or col < 0 or row >= len(self._rows) or col >= len(self._headers):
            raise TableIndexError(
                f"Row Index ({row}) and Header Index ({col}) out of bounds. "
                f"Row Count ({len(self._rows)}), Header Count ({len(self._headers)})"
            )
