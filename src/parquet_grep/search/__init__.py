#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Streaming grep pipeline over Parquet record groups.

The pipeline is pull-based: ``iter_records`` decodes one row group at a time,
``iter_matches`` filters records through the compiled pattern, and
``WindowController`` applies offset/limit per file and stops pulling once the
window is full.
"""

from parquet_grep.search.discovery import find_parquet_files, resolve_locator, resolve_targets
from parquet_grep.search.pattern import compile_pattern, has_uppercase, resolve_ignore_case
from parquet_grep.search.predicate import iter_matches, record_matches
from parquet_grep.search.service import GrepService, GrepSummary, iter_outcomes, search_file
from parquet_grep.search.source import (
    ParquetGroupReader,
    RecordGroupReader,
    iter_records,
    open_reader,
    stream_records,
)
from parquet_grep.search.types import (
    CompiledPattern,
    FileFailure,
    FileOutcome,
    FileResult,
    Match,
    Window,
    WindowState,
)
from parquet_grep.search.window import WindowController

__all__ = [
    "CompiledPattern",
    "FileFailure",
    "FileOutcome",
    "FileResult",
    "GrepService",
    "GrepSummary",
    "Match",
    "ParquetGroupReader",
    "RecordGroupReader",
    "Window",
    "WindowController",
    "WindowState",
    "compile_pattern",
    "find_parquet_files",
    "has_uppercase",
    "iter_matches",
    "iter_outcomes",
    "iter_records",
    "open_reader",
    "record_matches",
    "resolve_ignore_case",
    "resolve_locator",
    "resolve_targets",
    "search_file",
    "stream_records",
]
