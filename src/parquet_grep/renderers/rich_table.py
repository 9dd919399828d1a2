#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Terminal tables rendered with rich.

Used for ``--rich`` when stdout is a terminal. Cells are trimmed exactly like
the Markdown renderer, but matches are styled as rich spans instead of raw
escape codes, and cell text needs no Markdown escaping.
"""

from __future__ import annotations

from typing import Any, Iterator

from parquet_grep.constants import DEPS_RICH, ELLIPSIS_MARKER, NULL_DISPLAY, ROW_COLUMN_HEADER, TRIM_MARKER
from parquet_grep.renderers.base import BaseRenderer
from parquet_grep.renderers.transform import TransformSettings, match_spans, trim_span
from parquet_grep.search.types import CompiledPattern, FileResult
from parquet_grep.utils.decorators import requires_dependencies
from parquet_grep.utils.values import stringify_value

MATCH_STYLE = "reverse"
MARKER_STYLE = "dim"


class RichTableRenderer(BaseRenderer):
    """Render each file's matches as a rich ``Table``.

    Parameters
    ----------
    settings : TransformSettings, optional
        Trim budget and highlighting
    console : rich.console.Console, optional
        Console used to lay out tables. Defaults to a console sized for the
        current terminal.

    """

    @requires_dependencies("rich", DEPS_RICH)
    def __init__(self, settings: TransformSettings | None = None, console: Any = None):
        """Initialize the renderer and its console."""
        super().__init__(settings)
        if console is None:
            from rich.console import Console

            console = Console()
        self.console = console

    def format_cell(self, value: Any, pattern: CompiledPattern) -> Any:
        """Return a styled ``Text`` for one field value."""
        from rich.text import Text

        text = stringify_value(value)
        if text is None:
            return Text(NULL_DISPLAY, style="italic dim")

        begin, finish = trim_span(text, pattern, self.settings.budget)
        kept = text[begin:finish]
        cell = Text()
        if begin > 0:
            cell.append(TRIM_MARKER, style=MARKER_STYLE)
        cell.append(kept)
        if finish < len(text):
            cell.append(TRIM_MARKER, style=MARKER_STYLE)

        if self.settings.highlight and not pattern.invert:
            shift = (1 if begin > 0 else 0) - begin
            for start, end in match_spans(text, pattern, begin, finish):
                cell.stylize(MATCH_STYLE, start + shift, end + shift)
        return cell

    def build_table(self, result: FileResult) -> Any:
        """Build the rich ``Table`` for one file."""
        from rich.table import Table

        columns = list(result.matches[0].record.keys())
        table = Table(title=result.file_id, title_style="bold magenta", title_justify="left")
        table.add_column(ROW_COLUMN_HEADER, style="cyan", justify="right", no_wrap=True)
        for column in columns:
            table.add_column(str(column), overflow="fold")
        for match in result.matches:
            table.add_row(
                str(match.row_offset), *(self.format_cell(match.record.get(column), match.pattern) for column in columns)
            )
        if result.truncated:
            table.caption = ELLIPSIS_MARKER
        return table

    def render(self, result: FileResult) -> Iterator[str]:
        """Yield the laid-out table lines for one file."""
        if result.is_empty:
            return
        with self.console.capture() as capture:
            self.console.print(self.build_table(result))
        yield from capture.get().rstrip("\n").split("\n")
        yield ""


__all__ = ["RichTableRenderer"]
