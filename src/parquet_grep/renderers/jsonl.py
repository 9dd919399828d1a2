#  Copyright (c) 2025 Tom Villani, Ph.D.
"""JSON-lines output: one self-contained object per match."""

from __future__ import annotations

import json
from typing import Any, Iterator

from parquet_grep.constants import ELLIPSIS_MARKER
from parquet_grep.renderers.base import BaseRenderer
from parquet_grep.renderers.transform import transform_record
from parquet_grep.search.types import FileResult, Match
from parquet_grep.utils.values import to_json_compatible


class JsonLinesRenderer(BaseRenderer):
    """Render matches as compact ``{"filename", "rowOffset", "value"}`` lines.

    ``value`` is the record after trimming and highlighting, converted with
    ``to_json_compatible`` so large integers and decimals survive a round trip
    through JSON readers.
    """

    def to_object(self, match: Match, file_id: str) -> dict[str, Any]:
        """Build the JSON object for one match."""
        value = transform_record(match.record, match.pattern, self.settings)
        return {
            "filename": file_id,
            "rowOffset": match.row_offset,
            "value": to_json_compatible(value),
        }

    def render(self, result: FileResult) -> Iterator[str]:
        """Yield one JSON line per match, then ``...`` when truncated."""
        if result.is_empty:
            return
        for match in result.matches:
            yield json.dumps(self.to_object(match, result.file_id), ensure_ascii=False, separators=(",", ":"))
        if result.truncated:
            yield ELLIPSIS_MARKER


__all__ = ["JsonLinesRenderer"]
