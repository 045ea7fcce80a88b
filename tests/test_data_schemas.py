"""
Tests for table schema checks and the error hierarchy (csvtable/data/schemas.py).
"""

import pytest

from csvtable.data.schemas import (
    CsvParseError,
    FieldCountError,
    HeaderMismatchError,
    InvalidHeadersError,
    TableError,
    TableIndexError,
    headers_match,
    validate_headers,
    validate_row_width,
)


def test_error_hierarchy():
    """Every package error is a TableError; a few also extend built-ins."""
    assert issubclass(CsvParseError, TableError)
    assert issubclass(FieldCountError, CsvParseError)
    assert issubclass(TableIndexError, IndexError)
    assert issubclass(InvalidHeadersError, ValueError)
    assert issubclass(HeaderMismatchError, TableError)


def test_validate_headers_returns_copy():
    headers = ["a", "b"]
    validated = validate_headers(headers)

    assert validated == headers
    assert validated is not headers


def test_validate_headers_rejects_empty():
    with pytest.raises(InvalidHeadersError) as exc_info:
        validate_headers([], context="test.csv")

    assert "test.csv" in str(exc_info.value)


def test_validate_row_width_exact():
    assert validate_row_width(["1", "2"], 2) == ["1", "2"]


def test_validate_row_width_pads_in_permissive_mode():
    assert validate_row_width(["1"], 3, permissive=True) == ["1", "", ""]


def test_validate_row_width_short_row_strict():
    with pytest.raises(FieldCountError) as exc_info:
        validate_row_width(["1"], 3, line=7)

    assert exc_info.value.expected == 3
    assert exc_info.value.actual == 1
    assert exc_info.value.line == 7
    assert "at line 7" in str(exc_info.value)


@pytest.mark.parametrize("permissive", [True, False])
def test_validate_row_width_long_row_always_rejected(permissive):
    with pytest.raises(FieldCountError):
        validate_row_width(["1", "2", "3"], 2, permissive=permissive)


def test_headers_match():
    assert headers_match(["a", "b"], ["a", "b"])
    assert not headers_match(["a", "b"], ["a", "c"])
    assert not headers_match(["a", "b"], ["a"])
    assert not headers_match(["a", "b"], ["A", "b"])
