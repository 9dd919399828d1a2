#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/renderers/base.py
"""Base class for result renderers.

A renderer turns one file's windowed matches into output lines. Renderers are
stateless between files, so the orchestrator can stream each file's lines as
soon as that file has been searched.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator

from parquet_grep.renderers.transform import TransformSettings
from parquet_grep.search.types import FileResult


class BaseRenderer(ABC):
    """Abstract base class for all result renderers.

    Parameters
    ----------
    settings : TransformSettings or None, default = None
        Trim budget and highlighting applied to string values. If None, the
        defaults are used (trim to 60 characters, no highlighting).

    Examples
    --------
    Creating a custom renderer:

        >>> class CountRenderer(BaseRenderer):
        ...     def render(self, result):
        ...         yield f"{result.file_id}: {len(result.matches)}"

    """

    def __init__(self, settings: TransformSettings | None = None):
        """Initialize the renderer with presentation settings."""
        self.settings = settings or TransformSettings()

    @abstractmethod
    def render(self, result: FileResult) -> Iterator[str]:
        """Yield the output lines for one file's result.

        Implementations must yield nothing for a result without matches.

        Parameters
        ----------
        result : FileResult
            Windowed matches for a single file

        Yields
        ------
        str
            One output line, without a trailing newline

        """
        raise NotImplementedError

    def write(self, result: FileResult, writer: Callable[[str], None]) -> int:
        """Render a result and pass each line to ``writer``; return the line count."""
        count = 0
        for line in self.render(result):
            writer(line)
            count += 1
        return count

    def render_to_string(self, results: Iterable[FileResult]) -> str:
        """Render several results into one newline-terminated string."""
        lines = [line for result in results for line in self.render(result)]
        return "\n".join(lines) + "\n" if lines else ""


__all__ = ["BaseRenderer"]
