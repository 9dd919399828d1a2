"""Terminal capability checks for CLI output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/parquet_grep/cli/output.py
import logging
import sys
from typing import IO, Any, Optional

from parquet_grep.exceptions import DependencyError

logger = logging.getLogger(__name__)


def is_interactive(stream: Optional[IO[Any]] = None) -> bool:
    """Return True when the stream is attached to a terminal."""
    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def should_highlight(color: str, stream: Optional[IO[Any]] = None) -> bool:
    """Decide whether matches are wrapped in escape codes.

    ``always`` and ``never`` are taken literally; ``auto`` highlights only
    when the output stream is a terminal, so piped output stays clean.
    """
    if color == "always":
        return True
    if color == "never":
        return False
    return is_interactive(stream)


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(
    rich_requested: bool, stream: Optional[IO[Any]] = None, raise_on_missing: bool = False
) -> bool:
    """Determine if rich tables should be used.

    Parameters
    ----------
    rich_requested : bool
        Whether ``--rich`` (or ``rich = true`` in config) was given
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed

    Returns
    -------
    bool
        True if rich output should be used

    Notes
    -----
    Rich output is used when it was requested, the rich library is
    available, and the stream is a terminal. Otherwise Markdown tables are
    written.

    """
    if not rich_requested:
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                converter_name="rich",
                missing_packages=[("rich", "")],
                message="Rich output requires the optional 'rich' dependency. Install with: pip install parquet-grep[rich]",
            )
        logger.warning("Rich output requested but `rich` is not installed. Falling back to Markdown tables.")
        return False

    if not is_interactive(stream):
        logger.debug("Output is not a terminal; writing Markdown tables instead of rich tables")
        return False

    return True


__all__ = ["check_rich_available", "is_interactive", "should_highlight", "should_use_rich_output"]
