#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/search/service.py
"""Multi-file grep orchestration.

Files are searched one at a time in discovery order. Each file runs through
the record stream, the predicate and a fresh window controller; its result is
rendered and written before the next file is opened. A file that cannot be
read is reported and skipped without affecting the others.

"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator

from parquet_grep.exceptions import SourceUnreadableError
from parquet_grep.options.grep import GrepOptions
from parquet_grep.options.network import RemoteOptions
from parquet_grep.search.discovery import resolve_locator, resolve_targets
from parquet_grep.search.pattern import compile_pattern
from parquet_grep.search.predicate import iter_matches
from parquet_grep.search.source import ReaderOpener, RecordGroupReader, iter_records, open_reader
from parquet_grep.search.types import CompiledPattern, FileFailure, FileOutcome, FileResult, Window
from parquet_grep.search.window import WindowController
from parquet_grep.utils.decorators import debug_timer

if TYPE_CHECKING:
    from parquet_grep.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

Writer = Callable[[str], None]


def _default_opener(remote_options: RemoteOptions | None, transport: Any) -> ReaderOpener:
    def opener(locator: str) -> RecordGroupReader:
        return open_reader(locator, remote_options=remote_options, transport=transport)

    return opener


def search_file(
    file_id: str,
    pattern: CompiledPattern,
    window: Window,
    locator: str | None = None,
    opener: ReaderOpener | None = None,
    remote_options: RemoteOptions | None = None,
    transport: Any = None,
) -> FileOutcome:
    """Search one file and return its windowed result or its failure.

    Parameters
    ----------
    file_id : str
        Identifier shown in output
    pattern : CompiledPattern
        Compiled query
    window : Window
        Offset and limit for this file
    locator : str, optional
        Path or URL to open (defaults to ``file_id``)
    opener : callable, optional
        ``locator -> RecordGroupReader``; defaults to the pyarrow reader
    remote_options : RemoteOptions, optional
        HTTP settings for remote locators
    transport : httpx.BaseTransport, optional
        Transport override for remote locators

    Returns
    -------
    FileResult or FileFailure
        A failure discards any matches found before the error

    """
    opener = opener or _default_opener(remote_options, transport)
    try:
        with debug_timer(logger, f"Searching {file_id}"):
            reader = opener(locator or file_id)
            records = iter_records(reader, file_id)
            try:
                return WindowController(window).apply(iter_matches(records, pattern, file_id), file_id)
            finally:
                records.close()
                reader.close()
    except SourceUnreadableError as e:
        return FileFailure(file_id=file_id, error=e)


def iter_outcomes(
    file_ids: Iterable[str],
    pattern: CompiledPattern,
    window: Window,
    cwd: str | None = None,
    opener: ReaderOpener | None = None,
    remote_options: RemoteOptions | None = None,
    transport: Any = None,
) -> Iterator[FileOutcome]:
    """Lazily search files in order, yielding one outcome per file.

    Failures are logged against their file and yielded as ``FileFailure`` so
    the caller can count them; they never stop the iteration.
    """
    for file_id in file_ids:
        outcome = search_file(
            file_id,
            pattern,
            window,
            locator=resolve_locator(file_id, cwd),
            opener=opener,
            remote_options=remote_options,
            transport=transport,
        )
        if isinstance(outcome, FileFailure):
            logger.error(f"Error reading {file_id}: {outcome.error}")
        yield outcome


@dataclass
class GrepSummary:
    """Counters collected over one run."""

    files_searched: int = 0
    files_matched: int = 0
    matches_emitted: int = 0
    truncated_files: int = 0
    failures: list[FileFailure] = field(default_factory=list)

    @property
    def no_files(self) -> bool:
        """Return True when no file was found to search."""
        return self.files_searched == 0


class GrepService:
    """Run a query over files and stream rendered output.

    Parameters
    ----------
    query : str
        Regular expression to search for
    options : GrepOptions, optional
        Window, case, invert and presentation settings
    renderer : BaseRenderer, optional
        Output renderer. Defaults to the one selected by ``options.view_mode``
        without highlighting.
    writer : callable, optional
        Receives each output line; defaults to printing on stdout
    cwd : str, optional
        Directory searched when no path is given
    opener : callable, optional
        Reader factory override
    transport : httpx.BaseTransport, optional
        Transport override for remote locators

    Raises
    ------
    InvalidPatternError
        If the query does not compile. Raised here, before any file is opened.

    """

    def __init__(
        self,
        query: str,
        options: GrepOptions | None = None,
        renderer: BaseRenderer | None = None,
        writer: Writer | None = None,
        cwd: str | None = None,
        opener: ReaderOpener | None = None,
        transport: Any = None,
    ) -> None:
        """Compile the query and prepare the window and renderer."""
        self.options = options or GrepOptions()
        self.pattern = compile_pattern(
            query,
            ignore_case=self.options.ignore_case,
            case_sensitive=self.options.case_sensitive,
            invert=self.options.invert,
        )
        self.window = Window(offset=self.options.offset, limit=self.options.limit)
        if renderer is None:
            from parquet_grep.renderers import TransformSettings, create_renderer

            renderer = create_renderer(self.options.view_mode, TransformSettings(budget=self.options.trim))
        self.renderer = renderer
        self.writer = writer or self._print
        self.cwd = cwd
        self.opener = opener
        self.transport = transport

    @staticmethod
    def _print(line: str) -> None:
        print(line, file=sys.stdout)

    def outcomes(self, path: str | None = None) -> Iterator[FileOutcome]:
        """Resolve targets and yield each file's outcome without rendering."""
        file_ids = resolve_targets(path, cwd=self.cwd)
        logger.debug(f"Searching {len(file_ids)} file(s) for {self.pattern.query!r}")
        return iter_outcomes(
            file_ids,
            self.pattern,
            self.window,
            cwd=self.cwd,
            opener=self.opener,
            remote_options=self.options.remote,
            transport=self.transport,
        )

    def run(self, path: str | None = None) -> GrepSummary:
        """Search, render and write results file by file.

        Parameters
        ----------
        path : str, optional
            URL, file or directory. Defaults to searching ``cwd`` recursively.

        Returns
        -------
        GrepSummary
            Counts of files searched, matched and failed

        """
        summary = GrepSummary()
        for outcome in self.outcomes(path):
            summary.files_searched += 1
            if isinstance(outcome, FileFailure):
                summary.failures.append(outcome)
                continue
            self._record(summary, outcome)
            self.renderer.write(outcome, self.writer)
        return summary

    @staticmethod
    def _record(summary: GrepSummary, result: FileResult) -> None:
        if result.is_empty:
            return
        summary.files_matched += 1
        summary.matches_emitted += len(result.matches)
        if result.truncated:
            summary.truncated_files += 1


__all__ = ["GrepService", "GrepSummary", "iter_outcomes", "search_file"]
