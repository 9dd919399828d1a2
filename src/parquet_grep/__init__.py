"""parquet-grep - grep for Apache Parquet files.

parquet-grep searches the records of Parquet files for a regular expression
and reports matching rows as Markdown tables or JSON lines. Files are read one
row group at a time, so memory use is bounded by the largest row group, and a
search stops reading a file as soon as its result window is full.

Key Features
------------
- Regular expression search across every field of every record
- Smart case: lowercase queries ignore case, any uppercase letter makes them exact
- Inverted matching (``-v``) to list records where nothing matches
- Per-file result windows with offset and limit
- Long strings trimmed around the match, with terminal highlighting
- Local files, directory trees, and http(s) URLs via range requests

Requirements
------------
- Python 3.10+
- pyarrow for Parquet decoding
- Optional: httpx for remote files, rich for terminal tables

Examples
--------
Search a directory from Python:

    >>> from parquet_grep import grep_to_string
    >>> print(grep_to_string("alice", "data/", limit=10))

Work with structured results:

    >>> from parquet_grep import grep, FileResult
    >>> outcomes = grep("error", "logs.parquet", limit=0)
    >>> results = [o for o in outcomes if isinstance(o, FileResult)]

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "parquet-grep requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from parquet_grep.api import grep, grep_to_string
from parquet_grep.exceptions import (
    DependencyError,
    InvalidPatternError,
    InvalidWindowParameterError,
    ParquetGrepError,
    SourceUnreadableError,
)
from parquet_grep.options import GrepOptions, RemoteOptions
from parquet_grep.search import (
    CompiledPattern,
    FileFailure,
    FileResult,
    GrepService,
    Match,
    Window,
    WindowController,
    compile_pattern,
)

__all__ = [
    "__version__",
    "grep",
    "grep_to_string",
    "CompiledPattern",
    "DependencyError",
    "FileFailure",
    "FileResult",
    "GrepOptions",
    "GrepService",
    "InvalidPatternError",
    "InvalidWindowParameterError",
    "Match",
    "ParquetGrepError",
    "RemoteOptions",
    "SourceUnreadableError",
    "Window",
    "WindowController",
    "compile_pattern",
]
