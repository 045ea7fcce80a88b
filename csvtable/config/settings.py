"""
Configuration settings for table parsing and writing.

**Conceptual**: This module provides strongly-typed configuration objects that
load from environment variables (via .env files). All settings are validated
when constructed, so a bad delimiter or encoding fails at startup rather than
halfway through reading a file.

**Environment variables** (all optional):
  - CSVTABLE_PERMISSIVE: pad short rows instead of rejecting them (default: true).
  - CSVTABLE_ENCODING: text encoding for reading and writing files (default: utf-8).
  - CSVTABLE_DELIMITER: single-character field delimiter (default: ",").
    The value "\\t" is accepted as a tab.
  - CSVTABLE_STRIP_BOM: skip a leading UTF-8 byte-order-mark when reading
    files (default: true).
  - CSVTABLE_LOG_LEVEL: log level used by the action scripts (default: WARNING).

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); existing environment
# variables win over values in the file.
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(
        f"{name} must be one of {_TRUE_VALUES + _FALSE_VALUES}, got: {raw!r}"
    )


@dataclass(frozen=True)
class TableSettings:
    """
    Configuration for CSV table parsing and writing.

    Attributes:
        permissive: If True (default), rows shorter than the header list are
                    right-padded with empty strings. If False, any row whose
                    width differs from the header count is rejected.
                    Over-long rows are rejected either way.
        encoding: Text encoding used when reading and writing files.
        delimiter: Field delimiter, exactly one character.
        strip_bom: Skip a leading UTF-8 BOM (EF BB BF) when reading files.
    """
    permissive: bool = True
    encoding: str = "utf-8"
    delimiter: str = ","
    strip_bom: bool = True

    def __post_init__(self):
        """Validate settings after initialization."""
        if len(self.delimiter) != 1:
            raise ValueError(
                f"delimiter must be a single character, got: {self.delimiter!r}"
            )
        if not self.encoding:
            raise ValueError("encoding must be a non-empty codec name.")

    @classmethod
    def from_env(cls) -> "TableSettings":
        """
        Load table settings from environment variables.

        Returns:
            TableSettings with values from CSVTABLE_* variables, defaults
            for anything unset.

        Raises:
            ValueError: If a boolean variable is not a recognised true/false
                        value, or the delimiter/encoding is invalid.

        Usage example:
            >>> # In .env file:
            >>> # CSVTABLE_PERMISSIVE=false
            >>> # CSVTABLE_DELIMITER=;
            >>>
            >>> settings = TableSettings.from_env()
            >>> settings.delimiter
            ';'
        """
        permissive = _parse_bool(
            "CSVTABLE_PERMISSIVE", os.getenv("CSVTABLE_PERMISSIVE", "true")
        )
        strip_bom = _parse_bool(
            "CSVTABLE_STRIP_BOM", os.getenv("CSVTABLE_STRIP_BOM", "true")
        )
        encoding = os.getenv("CSVTABLE_ENCODING", "utf-8")
        delimiter = os.getenv("CSVTABLE_DELIMITER", ",")
        if delimiter == "\\t":
            delimiter = "\t"

        return cls(
            permissive=permissive,
            encoding=encoding,
            delimiter=delimiter,
            strip_bom=strip_bom,
        )


@dataclass(frozen=True)
class Settings:
    """
    Global settings for csvtable.

    Attributes:
        table: Parsing/writing settings.
        log_level: Name of the logging level the action scripts configure
                   (e.g., "WARNING", "DEBUG"). The library itself never
                   configures logging.
    """
    table: TableSettings = field(default_factory=TableSettings)
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate settings after initialization."""
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(
                f"CSVTABLE_LOG_LEVEL must be a logging level name, got: {self.log_level!r}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """Load global settings from environment variables."""
        return cls(
            table=TableSettings.from_env(),
            log_level=os.getenv("CSVTABLE_LOG_LEVEL", "WARNING"),
        )


# Lazily-loaded singleton. Tests can build Settings(...) directly or call
# reset_settings() after changing the environment.
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached.

    Returns:
        Global Settings singleton.

    Raises:
        ValueError: If an environment variable holds an invalid value.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          monkeypatch.setenv("CSVTABLE_PERMISSIVE", "false")
          reset_settings()
          assert get_settings().table.permissive is False
      ```
    """
    global _default_settings
    _default_settings = None
