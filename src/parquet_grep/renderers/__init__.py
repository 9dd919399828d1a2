#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning windowed file results into output lines."""

from __future__ import annotations

from typing import Any

from parquet_grep.renderers.base import BaseRenderer
from parquet_grep.renderers.jsonl import JsonLinesRenderer
from parquet_grep.renderers.markdown import MarkdownTableRenderer, escape_cell
from parquet_grep.renderers.transform import (
    TransformSettings,
    highlight_text,
    transform_record,
    transform_text,
    transform_value,
    trim_span,
    trim_text,
)


def create_renderer(
    view_mode: str = "table", settings: TransformSettings | None = None, use_rich: bool = False, console: Any = None
) -> BaseRenderer:
    """Return the renderer for a view mode.

    ``use_rich`` only affects table mode; JSON lines are never decorated.
    """
    if view_mode == "jsonl":
        return JsonLinesRenderer(settings)
    if use_rich:
        from parquet_grep.renderers.rich_table import RichTableRenderer

        return RichTableRenderer(settings, console=console)
    return MarkdownTableRenderer(settings)


__all__ = [
    "BaseRenderer",
    "JsonLinesRenderer",
    "MarkdownTableRenderer",
    "TransformSettings",
    "create_renderer",
    "escape_cell",
    "highlight_text",
    "transform_record",
    "transform_text",
    "transform_value",
    "trim_span",
    "trim_text",
]
