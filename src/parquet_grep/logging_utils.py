"""Logging setup for the parquet-grep entry points."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import logging
import sys
from typing import Optional

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value (INFO if unknown)."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(log_level: int | str, log_file: Optional[str] = None, trace_mode: bool = False) -> logging.Logger:
    """Route log records to stderr, and to ``log_file`` when given.

    stdout is left to search results so ``--jsonl`` output stays pipeable.
    ``trace_mode`` adds timestamps and logger names. A log file that cannot
    be opened is reported as a warning and skipped.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    root = logging.getLogger()
    root.setLevel(resolve_log_level(log_level))
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if file_error is not None:
        root.warning("Could not create log file %s: %s", log_file, file_error)
    elif log_file:
        root.debug("Logging to file: %s", log_file)
    return root
