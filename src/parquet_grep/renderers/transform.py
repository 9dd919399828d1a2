#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/renderers/transform.py
"""Context trimming and match highlighting shared by every renderer.

Both renderers show string values the same way: long strings are cut down to
a window around the first match, and (on a terminal) every match is wrapped
in reverse-video escape codes. Trimming happens first and only the kept text
is highlighted, so trim markers are never highlighted.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from parquet_grep.constants import DEFAULT_TRIM, HIGHLIGHT_END, HIGHLIGHT_START, TRIM_MARKER
from parquet_grep.search.types import CompiledPattern


@dataclass(frozen=True)
class TransformSettings:
    """How string values are presented.

    Attributes
    ----------
    budget : int
        Maximum characters kept from a long string (0 = keep everything)
    highlight : bool
        Wrap matched spans in ANSI reverse video

    """

    budget: int = DEFAULT_TRIM
    highlight: bool = False


def trim_span(text: str, pattern: CompiledPattern, budget: int) -> tuple[int, int]:
    """Return the ``[begin, end)`` slice of ``text`` kept under ``budget``."""
    length = len(text)
    if budget <= 0 or length <= budget:
        return 0, length

    # Position by the first real match even under invert
    found = pattern.regex.search(text)
    if found is None:
        return 0, budget

    start, end = found.span()
    if end - start >= budget:
        return start, start + budget

    spare = budget - (end - start)
    begin = start - spare // 2
    finish = end + (spare - spare // 2)
    if begin < 0:
        finish -= begin
        begin = 0
    if finish > length:
        begin -= finish - length
        finish = length
    return max(begin, 0), finish


def match_spans(
    text: str, pattern: CompiledPattern, begin: int = 0, finish: int | None = None
) -> list[tuple[int, int]]:
    """Return the non-empty match spans that start inside ``text[begin:finish]``.

    The regex always runs against the whole string, so anchors, ``\\b`` and
    lookarounds see the real neighbours of the kept slice. Spans are positions
    in ``text``; a span running past ``finish`` is cut at ``finish``.
    """
    finish = len(text) if finish is None else finish
    spans = []
    for found in pattern.regex.finditer(text, begin):
        start, end = found.span()
        if start >= finish:
            break
        if end > start:
            spans.append((start, min(end, finish)))
    return spans


def _with_markers(text: str, begin: int, finish: int, kept: str) -> str:
    prefix = TRIM_MARKER if begin > 0 else ""
    suffix = TRIM_MARKER if finish < len(text) else ""
    return f"{prefix}{kept}{suffix}"


def trim_text(text: str, pattern: CompiledPattern, budget: int) -> str:
    """Cut a long string down to ``budget`` characters around its first match.

    The kept window is balanced around the match and shifted inward when the
    match sits near either end. A ``…`` marker replaces each removed side; the
    markers do not count toward the budget.

    Examples
    --------
        >>> p = compile_pattern("needle")
        >>> trim_text("x" * 50 + "needle" + "y" * 50, p, 16)
        '…xxxxxneedleyyyyy…'

    """
    begin, finish = trim_span(text, pattern, budget)
    return _with_markers(text, begin, finish, text[begin:finish])


def highlight_text(text: str, pattern: CompiledPattern, begin: int = 0, finish: int | None = None) -> str:
    """Return ``text[begin:finish]`` with every match wrapped in reverse-video codes."""
    finish = len(text) if finish is None else finish
    pieces = []
    cursor = begin
    for start, end in match_spans(text, pattern, begin, finish):
        pieces.append(text[cursor:start])
        pieces.append(f"{HIGHLIGHT_START}{text[start:end]}{HIGHLIGHT_END}")
        cursor = end
    pieces.append(text[cursor:finish])
    return "".join(pieces)


def transform_text(text: str, pattern: CompiledPattern, settings: TransformSettings) -> str:
    """Trim a single string, then highlight the part that was kept."""
    if not settings.highlight or pattern.invert:
        return trim_text(text, pattern, settings.budget)
    begin, finish = trim_span(text, pattern, settings.budget)
    return _with_markers(text, begin, finish, highlight_text(text, pattern, begin, finish))


def transform_value(value: Any, pattern: CompiledPattern, *, budget: int, highlight: bool) -> Any:
    """Apply trimming and highlighting to every string leaf of a value.

    Lists, tuples and mappings are rebuilt with transformed leaves; every
    other value is returned unchanged.
    """
    return _transform(value, pattern, TransformSettings(budget=budget, highlight=highlight))


def _transform(value: Any, pattern: CompiledPattern, settings: TransformSettings) -> Any:
    if isinstance(value, str):
        return transform_text(value, pattern, settings)
    if isinstance(value, Mapping):
        return {key: _transform(item, pattern, settings) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_transform(item, pattern, settings) for item in value]
    return value


def transform_record(record: Mapping[str, Any], pattern: CompiledPattern, settings: TransformSettings) -> dict:
    """Transform every field of a record."""
    return {key: _transform(value, pattern, settings) for key, value in record.items()}


__all__ = [
    "TransformSettings",
    "highlight_text",
    "match_spans",
    "transform_record",
    "transform_text",
    "transform_value",
    "trim_span",
    "trim_text",
]
