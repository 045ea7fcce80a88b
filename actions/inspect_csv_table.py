#!/usr/bin/env python3
"""
Inspect, query, and edit a CSV table from the command line.

**What it does**:
  1. Loads the CSV file (a leading UTF-8 BOM is skipped)
  2. Prints a summary: header count, row count, headers
  3. Optionally prints a row by index (--row)
  4. Optionally searches a column for a value, ignoring case (--find)
  5. Optionally overwrites a cell (--set) and/or appends the rows of another
     CSV with identical headers (--append)
  6. Optionally writes the resulting table to a new file (--output)

**Usage**:
    From project root:
    ```bash
    python actions/inspect_csv_table.py people.csv
    python actions/inspect_csv_table.py people.csv --find name alice
    python actions/inspect_csv_table.py people.csv --set 0 1 ALICE --output fixed.csv
    python actions/inspect_csv_table.py jan.csv --append feb.csv --output q1.csv
    ```

**Exit codes**:
  - 0: Success
  - 1: The table could not be loaded, queried, edited, or written
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from csvtable.config.settings import get_settings
from csvtable.data.io import parse_table_file, write_table_file
from csvtable.data.schemas import TableError
from csvtable.data.table import NOT_FOUND, Table


def print_summary(table: Table, path: Path) -> None:
    """Print header/row counts and the header list."""
    print(f"File:    {path}")
    print(f"Headers: {table.header_count}")
    print(f"Rows:    {table.row_count}")
    for position, header in enumerate(table.headers):
        print(f"  [{position}] {header}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect, query, and edit a CSV table.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("path", type=Path, help="CSV file to load.")

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject rows shorter than the header list instead of padding them.",
    )

    parser.add_argument(
        "--row",
        type=int,
        default=None,
        help="Print the row at this index (0-based).",
    )

    parser.add_argument(
        "--find",
        nargs=2,
        metavar=("HEADER", "VALUE"),
        default=None,
        help="Print the first row whose HEADER column equals VALUE (case-insensitive).",
    )

    parser.add_argument(
        "--set",
        nargs=3,
        metavar=("ROW", "COL", "VALUE"),
        default=None,
        help=(
            "Overwrite the cell at ROW, COL (0-based). COL may also be a header "
            "name; a matching header name takes precedence over an index."
        ),
    )

    parser.add_argument(
        "--append",
        type=Path,
        default=None,
        help="Append the rows of another CSV file with identical headers.",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the resulting table to this path.",
    )

    return parser


def resolve_column(table: Table, column: str) -> int:
    """
    Resolve a column argument given as a header name or an index.

    A header name wins over an index, so a header literally named "2023"
    is picked by name.

    Raises:
        ValueError: If `column` is neither a number nor a known header.
    """
    position = table.header_index(column)
    if position != NOT_FOUND:
        return position
    if column.lstrip("-").isdigit():
        return int(column)
    raise ValueError(f"Unknown header: {column!r}")


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the table inspection script.

    **Workflow**:
      1. Parse command-line arguments and configure logging from settings
      2. Load the table (strict or permissive)
      3. Print summary, then --row / --find results
      4. Apply --set, then --append
      5. Write --output if given

    Returns:
        Process exit code (0 on success, 1 on any error).
    """
    args = build_parser().parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    permissive = False if args.strict else None

    try:
        table = parse_table_file(args.path, permissive=permissive)
        print_summary(table, args.path)

        if args.row is not None:
            row = table.row_at(args.row)
            if row is None:
                print(f"Row {args.row}: (none)")
            else:
                print(f"Row {args.row}: {row}")

        if args.find is not None:
            header, value = args.find
            row, index = table.find_by_header(header, value)
            if index == NOT_FOUND:
                print(f"No row with {header} = {value!r}")
            else:
                print(f"Found {header} = {value!r} at row {index}: {row}")

        if args.set is not None:
            row_arg, col_arg, value = args.set
            row_index = int(row_arg)
            col_index = resolve_column(table, col_arg)
            old = table.value_at(row_index, col_index)
            table.set_value_at(row_index, col_index, value)
            print(f"Set [{row_index}, {col_index}]: {old!r} -> {value!r}")

        if args.append is not None:
            other = parse_table_file(args.append, permissive=permissive)
            table.append(other)
            print(f"Appended {other.row_count} rows from {args.append} (now {table.row_count})")

        if args.output is not None:
            write_table_file(table, args.output)
            print(f"Wrote {table.row_count} rows to {args.output}")

    except (TableError, OSError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
