"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import csvtable...' works, and
gives every test fresh settings built from a clean environment.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from csvtable.config.settings import reset_settings  # noqa: E402

CSVTABLE_ENV_VARS = [
    "CSVTABLE_PERMISSIVE",
    "CSVTABLE_ENCODING",
    "CSVTABLE_DELIMITER",
    "CSVTABLE_STRIP_BOM",
    "CSVTABLE_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Clear CSVTABLE_* variables and the cached settings around each test."""
    for name in CSVTABLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
