#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Target resolution and recursive Parquet file discovery."""

from __future__ import annotations

import logging
import os
from typing import Iterator

from parquet_grep.constants import IGNORE_DIRS, PARQUET_EXTENSION
from parquet_grep.utils.network import is_url

logger = logging.getLogger(__name__)


def _is_skipped(name: str) -> bool:
    return name.startswith(".") or name in IGNORE_DIRS


def _walk(directory: str, display_prefix: str) -> Iterator[str]:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return

    for entry in entries:
        if _is_skipped(entry.name):
            continue
        display_path = os.path.join(display_prefix, entry.name) if display_prefix else entry.name
        try:
            # Directory symlinks are not followed, which rules out cycles
            if entry.is_dir(follow_symlinks=False):
                yield from _walk(entry.path, display_path)
            elif entry.name.lower().endswith(PARQUET_EXTENSION) and entry.is_file():
                yield display_path
        except OSError as e:
            logger.debug(f"Skipping {entry.path}: {e}")


def find_parquet_files(root: str, relative: bool = False) -> list[str]:
    """Recursively enumerate ``.parquet`` files below ``root``.

    Entries are visited depth-first in name order. Hidden entries (leading
    ``.``) and dependency-cache directories such as ``node_modules`` are
    skipped. Directories that cannot be listed are skipped with a debug log.

    Parameters
    ----------
    root : str
        Directory to search
    relative : bool, default False
        Return paths relative to ``root`` instead of joined onto it

    Returns
    -------
    list[str]
        Matching file paths in discovery order

    """
    return list(_walk(root, "" if relative else root))


def resolve_targets(path: str | None = None, cwd: str | None = None) -> list[str]:
    """Turn the optional CLI path argument into an ordered list of file ids.

    Parameters
    ----------
    path : str, optional
        A URL, a file, or a directory. When omitted, ``cwd`` is searched
        recursively and the ids are relative to it.
    cwd : str, optional
        Working directory (defaults to the process working directory)

    Returns
    -------
    list[str]
        File ids in the order they should be searched. A path that does not
        exist is returned as-is so it can be reported as unreadable.

    """
    base = cwd if cwd is not None else os.getcwd()

    if path is None:
        return find_parquet_files(base, relative=True)

    if is_url(path):
        return [path]

    filesystem_path = os.path.join(base, path)
    if os.path.isdir(filesystem_path):
        return [os.path.join(path, name) for name in find_parquet_files(filesystem_path, relative=True)]

    return [path]


def resolve_locator(file_id: str, cwd: str | None = None) -> str:
    """Map a file id back to a locator the reader can open."""
    if cwd is None or is_url(file_id) or os.path.isabs(file_id):
        return file_id
    return os.path.join(cwd, file_id)


__all__ = ["find_parquet_files", "resolve_locator", "resolve_targets"]
