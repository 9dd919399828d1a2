#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Record-level match test."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from parquet_grep.search.types import CompiledPattern, Match
from parquet_grep.utils.values import stringify_value


def _any_field_matches(record: Mapping[str, Any], pattern: CompiledPattern) -> bool:
    search = pattern.regex.search
    for value in record.values():
        text = stringify_value(value)
        if text is not None and search(text) is not None:
            return True
    return False


def record_matches(record: Mapping[str, Any], pattern: CompiledPattern) -> bool:
    """Return whether a record satisfies the pattern.

    A record matches when the pattern is found in the text form of at least
    one non-null field. Under invert the answer is negated, so a record whose
    fields are all null always matches an inverted pattern.
    """
    hit = _any_field_matches(record, pattern)
    return not hit if pattern.invert else hit


def iter_matches(
    records: Iterable[tuple[int, Mapping[str, Any]]], pattern: CompiledPattern, file_id: str = ""
) -> Iterator[Match]:
    """Filter ``(row_offset, record)`` pairs down to accepted matches, lazily."""
    for row_offset, record in records:
        if record_matches(record, pattern):
            yield Match(row_offset=row_offset, record=record, pattern=pattern, file_id=file_id)


__all__ = ["iter_matches", "record_matches"]
