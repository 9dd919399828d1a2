#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/constants.py
"""Constants and defaults shared across parquet-grep.

This module centralizes the default values used by the option dataclasses,
the CLI and the renderers so that a single edit changes behavior everywhere.
"""

from __future__ import annotations

from typing import Literal

# Window defaults (per file)
DEFAULT_LIMIT = 5
DEFAULT_OFFSET = 0

# Maximum characters kept around a match in a string value (0 = no trimming)
DEFAULT_TRIM = 60

ViewMode = Literal["table", "jsonl"]
ColorMode = Literal["auto", "always", "never"]

VIEW_MODES: tuple[str, ...] = ("table", "jsonl")
COLOR_MODES: tuple[str, ...] = ("auto", "always", "never")
DEFAULT_VIEW_MODE: ViewMode = "table"
DEFAULT_COLOR_MODE: ColorMode = "auto"

# File discovery
PARQUET_EXTENSION = ".parquet"
IGNORE_DIRS = frozenset(
    {
        "node_modules",
        "__pycache__",
        "site-packages",
        "venv",
    }
)

# Output markers
ELLIPSIS_MARKER = "..."
TRIM_MARKER = "…"
HIGHLIGHT_START = "\033[7m"
HIGHLIGHT_END = "\033[27m"
NULL_DISPLAY = "null"
ROW_COLUMN_HEADER = "Row"

# JSON cannot carry integers beyond this magnitude without losing precision
MAX_SAFE_INTEGER = 2**53 - 1

# Network
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_USER_AGENT = "parquet-grep/0.1 (+https://pypi.org/project/parquet-grep/)"
DISABLE_NETWORK_ENV = "PARQUET_GREP_DISABLE_NETWORK"
REMOTE_SCHEMES = ("http", "https")

# Configuration discovery
CONFIG_ENV_VAR = "PARQUET_GREP_CONFIG"
CONFIG_SECTION = "parquet-grep"

# Optional dependency groups as (install_name, import_name, version_spec)
DEPS_PARQUET = [("pyarrow", "pyarrow", ">=14.0.0")]
DEPS_NETWORK = [("httpx", "httpx", ">=0.28.1")]
DEPS_RICH = [("rich", "rich", ">=13.0.0")]
