#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/api.py
"""Python entry points for searching Parquet files.

These functions run the same pipeline as the CLI without touching stdout:
``grep`` returns structured outcomes and ``grep_to_string`` returns the
rendered text.

Examples
--------
    >>> from parquet_grep import grep
    >>> for outcome in grep("alice", "data/"):
    ...     if isinstance(outcome, FileResult):
    ...         print(outcome.file_id, [m.row_offset for m in outcome.matches])

"""

from __future__ import annotations

from typing import Any

from parquet_grep.options.grep import GrepOptions
from parquet_grep.renderers import TransformSettings, create_renderer
from parquet_grep.search.service import GrepService
from parquet_grep.search.types import FileOutcome


def _resolve_options(options: GrepOptions | None, overrides: dict[str, Any]) -> GrepOptions:
    options = options or GrepOptions()
    return options.create_updated(**overrides) if overrides else options


def grep(
    query: str,
    path: str | None = None,
    options: GrepOptions | None = None,
    cwd: str | None = None,
    **overrides: Any,
) -> list[FileOutcome]:
    """Search Parquet files and return one outcome per file searched.

    Parameters
    ----------
    query : str
        Regular expression to search for
    path : str, optional
        File, directory or http(s) URL. Defaults to ``cwd`` searched recursively.
    options : GrepOptions, optional
        Search settings
    cwd : str, optional
        Directory used when ``path`` is omitted or relative
    **overrides
        ``GrepOptions`` fields to override (e.g. ``limit=0, invert=True``)

    Returns
    -------
    list[FileResult | FileFailure]
        Outcomes in discovery order, including files without matches

    Raises
    ------
    InvalidPatternError
        If the query does not compile
    InvalidWindowParameterError
        If ``offset`` or ``limit`` is invalid

    """
    service = GrepService(query, _resolve_options(options, overrides), cwd=cwd)
    return list(service.outcomes(path))


def grep_to_string(
    query: str,
    path: str | None = None,
    options: GrepOptions | None = None,
    cwd: str | None = None,
    **overrides: Any,
) -> str:
    """Search Parquet files and return the rendered Markdown or JSON-lines text.

    Highlighting is only applied when ``color="always"``.
    """
    resolved = _resolve_options(options, overrides)
    settings = TransformSettings(budget=resolved.trim, highlight=resolved.color == "always")
    lines: list[str] = []
    service = GrepService(
        query,
        resolved,
        renderer=create_renderer(resolved.view_mode, settings),
        writer=lines.append,
        cwd=cwd,
    )
    service.run(path)
    return "\n".join(lines) + "\n" if lines else ""


__all__ = ["grep", "grep_to_string"]
