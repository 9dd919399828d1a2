"""Shared data structures for the grep pipeline."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from parquet_grep.exceptions import InvalidWindowParameterError, SourceUnreadableError


@dataclass(frozen=True)
class CompiledPattern:
    """A query compiled once per invocation.

    Attributes
    ----------
    query : str
        The query exactly as the user supplied it
    regex : re.Pattern
        Compiled regular expression with the resolved case flag
    ignore_case : bool
        Resolved case sensitivity (smart case plus overrides)
    invert : bool
        Select records where no field matches

    """

    query: str
    regex: re.Pattern[str]
    ignore_case: bool = False
    invert: bool = False


@dataclass(frozen=True)
class Match:
    """A record accepted by the predicate, tagged with its logical position."""

    row_offset: int
    record: Mapping[str, Any] = field(repr=False)
    pattern: CompiledPattern = field(repr=False)
    file_id: str = ""


@dataclass(frozen=True)
class Window:
    """Per-file result window: skip ``offset`` matches, then emit up to ``limit`` (0 = unbounded)."""

    offset: int = 0
    limit: int = 0

    def __post_init__(self) -> None:
        for name in ("offset", "limit"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidWindowParameterError(name, value)


class WindowState(Enum):
    """States of the per-file window controller."""

    SKIPPING = "skipping"
    EMITTING = "emitting"
    DONE = "done"
    DONE_TRUNCATED = "done_truncated"


@dataclass(frozen=True)
class FileResult:
    """Windowed matches found in one file.

    ``truncated`` is True when at least one more accepted match existed beyond
    the emitted window.
    """

    file_id: str
    matches: tuple[Match, ...] = ()
    truncated: bool = False

    @property
    def is_empty(self) -> bool:
        """Return True when nothing in this file should be rendered."""
        return not self.matches


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be read; partial matches are discarded."""

    file_id: str
    error: SourceUnreadableError


FileOutcome = Union[FileResult, FileFailure]


__all__ = [
    "CompiledPattern",
    "FileFailure",
    "FileOutcome",
    "FileResult",
    "Match",
    "Window",
    "WindowState",
]
