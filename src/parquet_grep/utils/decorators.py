#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/utils/decorators.py
"""Decorators for optional-dependency checks and debug timing."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from parquet_grep.exceptions import DependencyError
from parquet_grep.utils.packages import unmet_requirements


def requires_dependencies(feature_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Raise ``DependencyError`` unless ``packages`` are importable at the needed versions.

    Parameters
    ----------
    feature_name : str
        Feature named in the error (e.g. "network", "rich")
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples; an empty
        ``version_spec`` accepts any version

    Examples
    --------
        >>> @requires_dependencies("network", [("httpx", "httpx", ">=0.28.1")])
        ... def fetch(url):
        ...     import httpx
        ...     return httpx.get(url)

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, too_old, import_error = unmet_requirements(packages)
            if missing or too_old:
                raise DependencyError(
                    converter_name=feature_name,
                    missing_packages=missing,
                    version_mismatches=too_old,
                    original_import_error=import_error,
                ) from import_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Searching data.parquet")

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Searching data.parquet"):
        ...     outcome = search_file("data.parquet", pattern, window)

    Notes
    -----
    Only measures time when the logger has DEBUG enabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
