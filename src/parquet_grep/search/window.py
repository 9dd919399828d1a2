#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Per-file offset/limit windowing with lookahead truncation detection."""

from __future__ import annotations

import logging
from typing import Iterable

from parquet_grep.search.types import FileResult, Match, Window, WindowState

logger = logging.getLogger(__name__)


class WindowController:
    """Apply a ``Window`` to a stream of matches from one file.

    The controller is push-based: the caller offers matches one at a time and
    stops pulling as soon as ``offer`` returns False. Truncation is detected by
    looking at exactly one match past the limit, so a source is never read
    further than that.

    Parameters
    ----------
    window : Window
        Offset and limit to apply. A fresh controller is needed per file.

    """

    def __init__(self, window: Window) -> None:
        """Start in SKIPPING when there is an offset, otherwise EMITTING."""
        self.window = window
        self._remaining_skip = window.offset
        self._emitted: list[Match] = []
        self.truncated = False
        self.state = WindowState.SKIPPING if window.offset > 0 else WindowState.EMITTING

    @property
    def emitted(self) -> tuple[Match, ...]:
        """Matches emitted so far, in the order they were offered."""
        return tuple(self._emitted)

    @property
    def done(self) -> bool:
        """Return True once the controller accepts no further matches."""
        return self.state in (WindowState.DONE, WindowState.DONE_TRUNCATED)

    def offer(self, match: Match) -> bool:
        """Consume one match and report whether more are wanted.

        Raises
        ------
        RuntimeError
            If called after the controller has finished

        """
        if self.done:
            raise RuntimeError("WindowController is finished; no further matches can be offered")

        if self.state is WindowState.SKIPPING:
            self._remaining_skip -= 1
            if self._remaining_skip == 0:
                self.state = WindowState.EMITTING
            return True

        limit = self.window.limit
        if limit and len(self._emitted) >= limit:
            # One match past the limit proves there was more to show
            self.truncated = True
            self.state = WindowState.DONE_TRUNCATED
            return False

        self._emitted.append(match)
        return True

    def finish(self) -> None:
        """Signal that the source is exhausted."""
        if not self.done:
            self.state = WindowState.DONE
            self.truncated = False

    def result(self, file_id: str) -> FileResult:
        """Build the ``FileResult`` for what has been emitted."""
        return FileResult(file_id=file_id, matches=self.emitted, truncated=self.truncated)

    def apply(self, matches: Iterable[Match], file_id: str) -> FileResult:
        """Drive the controller over a lazy iterable of matches.

        When the window fills before the iterable is exhausted, the iterable is
        closed (for generators this runs their cleanup) and nothing further is
        pulled from it.
        """
        iterator = iter(matches)
        try:
            for match in iterator:
                if not self.offer(match):
                    break
            else:
                self.finish()
        finally:
            close = getattr(iterator, "close", None)
            if close is not None:
                close()

        if self.truncated:
            logger.debug(f"{file_id}: window full after {len(self._emitted)} matches, stopped reading")
        return self.result(file_id)


__all__ = ["WindowController"]
