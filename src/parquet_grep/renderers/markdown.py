#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/renderers/markdown.py
"""Grouped Markdown table output.

Each file with matches becomes a section::

    ## data/users.parquet

    | Row | id | name |
    |-----|-----|-----|
    | 3 | 3 | alice |

    ...

The ``...`` line appears only when the file had more matches than the
window showed.

"""

from __future__ import annotations

import re
from typing import Any, Iterator

from parquet_grep.constants import ELLIPSIS_MARKER, NULL_DISPLAY, ROW_COLUMN_HEADER
from parquet_grep.renderers.base import BaseRenderer
from parquet_grep.renderers.transform import transform_text
from parquet_grep.search.types import CompiledPattern, FileResult
from parquet_grep.utils.values import stringify_value

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def escape_cell(text: str) -> str:
    r"""Escape text for a Markdown table cell.

    Pipes become ``\|`` and line breaks become ``<br>`` so a value can never
    end its cell or its row.

    Examples
    --------
        >>> escape_cell("a|b\nc")
        'a\\|b<br>c'

    """
    return _LINE_BREAK_RE.sub("<br>", text.replace("|", r"\|"))


def _table_row(cells: list[str]) -> str:
    return f"| {' | '.join(cells)} |"


class MarkdownTableRenderer(BaseRenderer):
    """Render each file's matches as a Markdown table section."""

    def format_cell(self, value: Any, pattern: CompiledPattern) -> str:
        """Return the escaped display text for one field value."""
        text = stringify_value(value)
        if text is None:
            return NULL_DISPLAY
        return escape_cell(transform_text(text, pattern, self.settings))

    def render(self, result: FileResult) -> Iterator[str]:
        """Yield the section for one file (nothing when it has no matches)."""
        if result.is_empty:
            return

        # Columns come from the first match; later records are projected onto them
        columns = list(result.matches[0].record.keys())

        yield f"## {result.file_id}"
        yield ""
        yield _table_row([ROW_COLUMN_HEADER] + [escape_cell(str(column)) for column in columns])
        yield "|" + "|".join("-----" for _ in range(len(columns) + 1)) + "|"
        for match in result.matches:
            cells = [self.format_cell(match.record.get(column), match.pattern) for column in columns]
            yield _table_row([str(match.row_offset)] + cells)
        yield ""
        if result.truncated:
            yield ELLIPSIS_MARKER
            yield ""


__all__ = ["MarkdownTableRenderer", "escape_cell"]
