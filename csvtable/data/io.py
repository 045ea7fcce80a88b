"""
CSV readers and writers for tables.

**Conceptual**: This module is the only I/O boundary for tables. Text comes
in through `parse_table` (any iterable of lines, e.g. an open text file or
io.StringIO) or `parse_table_file` (a path on disk), and goes out through
`write_table_file`. `table_to_frame` / `table_from_frame` convert between
tables and pandas DataFrames for analysis code.

**Format**:
  - First non-blank record is the header list; later records are rows.
  - Standard CSV quoting: double-quote enclosure, doubled quotes as escapes,
    embedded newlines inside quoted fields.
  - Blank lines are skipped.
  - Everything is text; no type inference.
  - Files may start with a UTF-8 byte-order-mark, which is skipped on read.
    Written files never carry one.

**Errors**:
  - CsvParseError: malformed CSV, undecodable bytes, or no header record.
    A quote inside an unquoted field (e.g. `1,x"y`) is not an error; it is
    kept as a literal character of that field.
  - FieldCountError: row width does not fit the header count.
  - OSError: file open/read/write failures, raised unchanged.

Parsing and writing use the csv module; the delimiter, encoding, BOM handling
and strict/permissive row policy default to csvtable.config.settings.
"""

import codecs
import csv
import io
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import pandas as pd

from csvtable.config.settings import get_settings
from csvtable.data.schemas import CsvParseError, validate_headers, validate_row_width
from csvtable.data.table import Table

logger = logging.getLogger(__name__)


def _raise_field_size_limit() -> None:
    """Lift the csv module's per-field size cap to the largest value the platform accepts."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit //= 2


_raise_field_size_limit()


def _iter_records(reader, context: str | None) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (line number, record) pairs from a csv reader, skipping blank lines.

    Reader and decoding failures are re-raised as CsvParseError carrying the
    line number where the reader stopped.
    """
    ctx = f"{context}: " if context else ""
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            raise CsvParseError(
                f"{ctx}malformed CSV at line {reader.line_num}: {e}",
                line=reader.line_num,
            ) from e
        except UnicodeDecodeError as e:
            raise CsvParseError(
                f"{ctx}cannot decode input after line {reader.line_num}: {e}",
                line=reader.line_num,
            ) from e
        if not record:
            continue
        yield reader.line_num, record


def parse_table(
    source: Iterable[str],
    permissive: bool | None = None,
    delimiter: str | None = None,
    context: str | None = None,
) -> Table:
    """
    Parse CSV text into a Table.

    **Functionally**:
      - Reads the first non-blank record as headers. Duplicate header names
        are kept as-is.
      - Reads every later record as a row until end of input.
      - Rows wider than the header list always raise FieldCountError.
      - Rows narrower than the header list are right-padded with "" in
        permissive mode and raise FieldCountError in strict mode.
      - A syntax error anywhere aborts the load; no partial table is returned.

    Args:
        source: Iterable of text lines. Open files should use newline="" so
                quoted fields keep their embedded line breaks. A plain
                str is treated as the whole CSV text.
        permissive: Row width policy. None uses the configured default
                    (CSVTABLE_PERMISSIVE, true unless overridden).
        delimiter: Field delimiter. None uses the configured default.
        context: Optional source description (e.g., the file path) used as
                 an error message prefix.

    Returns:
        Table with the parsed headers and rows.

    Raises:
        CsvParseError: If the input is malformed or has no header record.
        FieldCountError: If a row does not fit the header count.

    Example:
        >>> table = parse_table(io.StringIO("id,name\\n1,alice\\n2\\n"))
        >>> table.headers, table.row_count
        (['id', 'name'], 2)
        >>> table.row_at(1)
        ['2', '']
    """
    settings = get_settings().table
    if permissive is None:
        permissive = settings.permissive
    if delimiter is None:
        delimiter = settings.delimiter

    if isinstance(source, str):
        source = io.StringIO(source, newline="")

    reader = csv.reader(source, delimiter=delimiter, strict=True)
    records = _iter_records(reader, context)

    first = next(records, None)
    if first is None:
        ctx = f"{context}: " if context else ""
        raise CsvParseError(f"{ctx}no header record found; input is empty.")
    _, header_record = first
    headers = validate_headers(header_record, context=context)
    header_count = len(headers)

    rows = []
    for line, record in records:
        if permissive and len(record) < header_count:
            logger.debug(
                "Padding row at line %d from %d to %d fields",
                line, len(record), header_count,
            )
        rows.append(
            validate_row_width(
                record,
                header_count,
                line=line,
                permissive=permissive,
                context=context,
            )
        )

    table = Table(headers, rows)
    logger.debug("Parsed table: %d headers, %d rows", table.header_count, table.row_count)
    return table


def parse_table_file(
    path: Path | str,
    permissive: bool | None = None,
) -> Table:
    """
    Read a CSV file from disk into a Table.

    **Functionally**:
      - Opens the file in binary mode and inspects the first 3 bytes. If they
        are the UTF-8 BOM (EF BB BF) they are skipped; otherwise the stream is
        rewound to the start. (Disabled when CSVTABLE_STRIP_BOM=false.)
      - Decodes the rest with the configured encoding and delegates to
        parse_table with the file path as error context.
      - The file handle is closed on every exit path, including errors.

    Args:
        path: Path to the CSV file. Can be string or pathlib.Path.
        permissive: Row width policy; None uses the configured default.

    Returns:
        Table with the file's headers and rows.

    Raises:
        FileNotFoundError / OSError: If the file cannot be opened or read.
        CsvParseError: If the content is malformed or empty.
        FieldCountError: If a row does not fit the header count.

    Example:
        >>> Path("people.csv").write_bytes(b"\\xef\\xbb\\xbfid,name\\n1,alice\\n")
        >>> parse_table_file("people.csv").headers
        ['id', 'name']
    """
    path = Path(path)
    settings = get_settings().table

    with open(path, "rb") as raw:
        if settings.strip_bom and raw.read(len(codecs.BOM_UTF8)) != codecs.BOM_UTF8:
            raw.seek(0)
        text = io.TextIOWrapper(raw, encoding=settings.encoding, newline="")
        try:
            table = parse_table(text, permissive=permissive, context=str(path))
        finally:
            # Hand the binary handle back so the with-block owns closing it.
            text.detach()

    logger.debug("Loaded %s: %d headers, %d rows", path, table.header_count, table.row_count)
    return table


def write_table_file(
    table: Table,
    path: Path | str,
) -> None:
    """
    Write a Table to a CSV file.

    **Functionally**:
      - Creates the file or truncates an existing one.
      - Writes the header record, then every row in order.
      - Quotes only fields that need it (delimiter, quote, or line break
        inside); records end with "\\n". A row holding a carriage return in
        any cell is written fully quoted so the "\\r" survives a re-read.
      - Uses the configured encoding and delimiter; never writes a BOM.
      - Not atomic: if a write fails part-way, the partial file is left on disk.

    Args:
        table: Table to serialize.
        path: Destination path. The parent directory must exist.

    Raises:
        OSError: If the file cannot be opened or written.

    Example:
        >>> write_table_file(table, "out.csv")
        # out.csv now contains "id,name\\n1,alice\\n..."
    """
    path = Path(path)
    settings = get_settings().table

    with open(path, "w", encoding=settings.encoding, newline="") as f:
        writer = csv.writer(f, delimiter=settings.delimiter, lineterminator="\n")
        quote_all_writer = csv.writer(
            f,
            delimiter=settings.delimiter,
            lineterminator="\n",
            quoting=csv.QUOTE_ALL,
        )
        for row in [table.headers, *table]:
            if any("\r" in cell for cell in row):
                quote_all_writer.writerow(row)
            else:
                writer.writerow(row)

    logger.debug("Wrote %s: %d headers, %d rows", path, table.header_count, table.row_count)


def table_to_frame(table: Table) -> pd.DataFrame:
    """
    Convert a Table into a pandas DataFrame of strings.

    Columns are the table's headers in order (duplicates preserved); every
    cell is the table's text value (object dtype). The frame is independent
    of the table.

    Example:
        >>> frame = table_to_frame(table)
        >>> frame.columns.tolist()
        ['id', 'name']
    """
    return pd.DataFrame(list(table), columns=table.headers, dtype=object)


def table_from_frame(frame: pd.DataFrame) -> Table:
    """
    Build a Table from a pandas DataFrame.

    **Functionally**:
      - Column labels become headers via str().
      - Missing values (NaN/None) become "".
      - Every other cell is converted with str(); the index is dropped.

    Args:
        frame: DataFrame to convert.

    Returns:
        Table with one row per DataFrame row.

    Raises:
        InvalidHeadersError: If the frame has no columns.
    """
    headers = validate_headers([str(column) for column in frame.columns], context="DataFrame")
    filled = frame.astype(object).where(frame.notna(), "")
    rows = [
        [value if isinstance(value, str) else str(value) for value in record]
        for record in filled.itertuples(index=False, name=None)
    ]
    return Table(headers, rows)
