#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Query compilation with smart-case resolution."""

from __future__ import annotations

import logging
import re

from parquet_grep.exceptions import InvalidPatternError
from parquet_grep.search.types import CompiledPattern

logger = logging.getLogger(__name__)


def has_uppercase(query: str) -> bool:
    """Return True when the query contains at least one uppercase letter (any script)."""
    return any(char.isupper() for char in query)


def resolve_ignore_case(query: str, ignore_case: bool = False, case_sensitive: bool = False) -> bool:
    """Decide case sensitivity for a query.

    Forced flags win; ``ignore_case`` wins over ``case_sensitive`` when both
    are set. Otherwise smart case applies: an all-lowercase query matches
    case-insensitively and any uppercase letter makes it case-sensitive.
    """
    if ignore_case:
        return True
    if case_sensitive:
        return False
    return not has_uppercase(query)


def compile_pattern(
    query: str,
    *,
    ignore_case: bool = False,
    case_sensitive: bool = False,
    invert: bool = False,
) -> CompiledPattern:
    """Compile a user query into a ``CompiledPattern``.

    Parameters
    ----------
    query : str
        Regular expression in Python ``re`` syntax
    ignore_case : bool, default False
        Force case-insensitive matching
    case_sensitive : bool, default False
        Force case-sensitive matching
    invert : bool, default False
        Select records where no field matches

    Returns
    -------
    CompiledPattern
        Pattern shared by every match of the run

    Raises
    ------
    InvalidPatternError
        If the query is not a valid regular expression

    """
    resolved_ignore_case = resolve_ignore_case(query, ignore_case=ignore_case, case_sensitive=case_sensitive)
    flags = re.IGNORECASE if resolved_ignore_case else 0
    try:
        regex = re.compile(query, flags)
    except re.error as e:
        raise InvalidPatternError(query, original_error=e) from e

    logger.debug(f"Compiled pattern {query!r} (ignore_case={resolved_ignore_case}, invert={invert})")
    return CompiledPattern(query=query, regex=regex, ignore_case=resolved_ignore_case, invert=invert)


__all__ = ["compile_pattern", "has_uppercase", "resolve_ignore_case"]
